from app.models.model_base import Base
from app.models.model_user import User
from app.models.model_session_result import SessionResult
from app.models.model_progress_profile import ProgressProfile
