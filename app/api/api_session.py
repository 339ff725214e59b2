from datetime import date
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Query

from app.helpers.login_manager import login_required
from app.models.model_user import User
from app.schemas.sche_base import DataResponse
from app.schemas.sche_session import HistoryResponse, SaveSessionRequest, SaveSessionResponse, SessionResultItem
from app.services.srv_history import HistoryService
from app.services.srv_progress import ProgressService

router = APIRouter()


@router.post('/save', response_model=SaveSessionResponse)
def save_session(
    data: SaveSessionRequest,
    current_user: User = Depends(login_required),
    progress_service: ProgressService = Depends()
) -> Any:
    """
    Save a finished session and return the XP, level and achievements it earned.
    """
    return progress_service.save_session(current_user, data)


@router.get('/results', response_model=DataResponse[List[SessionResultItem]])
def get_results(
    current_user: User = Depends(login_required),
    history_service: HistoryService = Depends()
) -> Any:
    return DataResponse().success_response(data=history_service.get_results(current_user))


@router.get('/history', response_model=HistoryResponse)
def get_history(
    startDate: Optional[date] = Query(None, description="First day, inclusive (YYYY-MM-DD)"),
    endDate: Optional[date] = Query(None, description="Last day, inclusive (YYYY-MM-DD)"),
    current_user: User = Depends(login_required),
    history_service: HistoryService = Depends()
) -> Any:
    """
    Per-day totals and a summary over a date range, the trailing 7 days by default.
    """
    return history_service.get_history(current_user, startDate, endDate)
