from datetime import date, timedelta
from typing import Optional

from fastapi import Depends

from app.core.config import settings
from app.helpers.exception_handler import ValidationException
from app.helpers.time_utils import default_range, local_day_bounds, local_today
from app.models.model_user import User
from app.progress import aggregate_history
from app.repository.repo_session_result import SessionResultRepository
from app.schemas.sche_session import DailyStat, HistoryResponse, HistorySummary, SessionResultItem
from app.services.srv_progress import to_result_sample


class HistoryService:
    def __init__(self, result_repo: SessionResultRepository = Depends()):
        self.result_repo = result_repo

    def resolve_range(self, start_date: Optional[date], end_date: Optional[date]):
        """Fill in missing bounds; the default is the trailing week ending today."""
        days = settings.HISTORY_DEFAULT_DAYS
        if start_date is None and end_date is None:
            return default_range(days, local_today())
        if end_date is None:
            end_date = max(start_date, local_today())
        if start_date is None:
            start_date = end_date - timedelta(days=days - 1)
        if start_date > end_date:
            raise ValidationException('startDate must not be after endDate')
        return start_date, end_date

    def get_history(
        self,
        current_user: User,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> HistoryResponse:
        start_date, end_date = self.resolve_range(start_date, end_date)
        lower, upper = local_day_bounds(start_date, end_date)
        results = self.result_repo.query_by_user(current_user.user_id, start=lower, end=upper)

        report = aggregate_history(to_result_sample(r) for r in results)
        recent = list(reversed(results))[:settings.HISTORY_RECENT_LIMIT]

        return HistoryResponse(
            success=True,
            summary=HistorySummary(
                totalReps=report.total_reps,
                totalTime=report.total_time,
                totalCalories=report.total_calories,
                sessionCount=report.session_count,
            ),
            dailyStats=[
                DailyStat(
                    date=day.day,
                    totalReps=day.total_reps,
                    totalTime=day.total_time,
                    totalCalories=day.total_calories,
                )
                for day in report.days
            ],
            recentSessions=[SessionResultItem.model_validate(r) for r in recent],
        )

    def get_results(self, current_user: User):
        return [SessionResultItem.model_validate(r) for r in self.result_repo.query_by_user(current_user.user_id)]
