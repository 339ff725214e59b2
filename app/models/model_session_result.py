from sqlalchemy import Column, Integer, DateTime, ForeignKey, Index, Uuid
from app.models.model_base import Base
import uuid

class SessionResult(Base):
    __tablename__ = "session_results"

    result_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    repetitions = Column(Integer, nullable=False, default=0)
    duration_seconds = Column(Integer, nullable=False, default=0)
    recorded_at = Column(DateTime, nullable=False)

    __table_args__ = (
        Index('ix_session_results_user_recorded', 'user_id', 'recorded_at'),
    )
