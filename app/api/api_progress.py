from typing import Any, List

from fastapi import APIRouter, Depends

from app.helpers.login_manager import login_required
from app.models.model_user import User
from app.progress import get_catalog
from app.schemas.sche_base import DataResponse
from app.schemas.sche_progress import ProgressResponse
from app.schemas.sche_session import AchievementItem
from app.services.srv_progress import ProgressService

router = APIRouter()


@router.get('/progress/me', response_model=DataResponse[ProgressResponse])
def get_my_progress(
    current_user: User = Depends(login_required),
    progress_service: ProgressService = Depends()
) -> Any:
    return DataResponse().success_response(data=progress_service.get_progress(current_user))


@router.get('/achievements', response_model=DataResponse[List[AchievementItem]])
def get_achievements() -> Any:
    return DataResponse().success_response(data=[AchievementItem(**a.to_dict()) for a in get_catalog()])
