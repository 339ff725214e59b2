from typing import Any

from fastapi import APIRouter, Depends

from app.helpers.login_manager import login_required
from app.schemas.sche_base import DataResponse
from app.schemas.sche_user import UserItemResponse
from app.models.model_user import User

router = APIRouter()


@router.get("/me", response_model=DataResponse[UserItemResponse])
def detail_me(current_user: User = Depends(login_required)) -> Any:
    """
    API get detail current User
    """
    return DataResponse().success_response(data=UserItemResponse.model_validate(current_user))
