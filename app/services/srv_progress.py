import logging
from typing import List, Optional

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.helpers.enums import SaveOutcome
from app.helpers.exception_handler import ConflictException, StoreUnavailableException
from app.helpers.time_utils import local_date, utc_now
from app.helpers.user_lock import UserLockRegistry, user_locks
from app.models.model_progress_profile import ProgressProfile
from app.models.model_session_result import SessionResult
from app.models.model_user import User
from app.progress import (
    ACHIEVEMENTS,
    ProfileState,
    ProgressDelta,
    ResultSample,
    apply_result,
    xp_for_level,
)
from app.repository.repo_progress_profile import ProgressProfileRepository
from app.repository.repo_session_result import SessionResultRepository
from app.schemas.sche_progress import AchievementStatus, ProgressResponse
from app.schemas.sche_session import AchievementItem, SaveSessionRequest, SaveSessionResponse

logger = logging.getLogger(__name__)


def to_profile_state(record: ProgressProfile) -> ProfileState:
    return ProfileState(
        xp=record.xp or 0,
        level=record.level or 1,
        unlocked_achievements=list(record.unlocked_achievements or []),
        current_streak=record.current_streak or 0,
        last_active_date=record.last_active_date,
        best_session_repetitions=record.best_session_repetitions or 0,
    )


def to_result_sample(result: SessionResult) -> ResultSample:
    return ResultSample(
        repetitions=result.repetitions,
        duration_seconds=result.duration_seconds,
        day=local_date(result.recorded_at),
    )


class ProgressService:
    """
    Saves sessions and applies them to the owner's progress.

    Updates for one user are serialized by a per-user lock, and the profile
    row is version checked on commit, so concurrent saves for the same user
    never lose or double-apply XP. A save either commits the result and the
    profile together or commits nothing.
    """

    def __init__(
        self,
        profile_repo: ProgressProfileRepository = Depends(),
        result_repo: SessionResultRepository = Depends(),
    ):
        self.profile_repo = profile_repo
        self.result_repo = result_repo
        self.locks: UserLockRegistry = user_locks

    def save_session(self, current_user: User, data: SaveSessionRequest) -> SaveSessionResponse:
        delta = self.record_result(current_user.user_id, repetitions=data.rep, duration_seconds=int(round(data.time)))
        return SaveSessionResponse(
            success=True,
            xpGained=delta.xp_gained,
            newLevel=delta.new_level,
            levelUp=delta.level_up,
            newAchievements=[AchievementItem(**a.to_dict()) for a in delta.newly_unlocked],
        )

    def record_result(self, user_id, repetitions: int, duration_seconds: int) -> ProgressDelta:
        with self.locks.hold(user_id):
            for attempt in range(1, settings.PROGRESS_MAX_RETRIES + 1):
                try:
                    delta = self._apply_once(user_id, repetitions, duration_seconds)
                except SQLAlchemyError as e:
                    self.profile_repo.discard()
                    logger.error(f"Failed to save session for user {user_id}: {e}")
                    raise StoreUnavailableException()

                if delta is not None:
                    logger.info(
                        f"Session saved: user_id={user_id}, rep={repetitions}, "
                        f"xp_gained={delta.xp_gained}, level={delta.new_level}"
                    )
                    return delta
                logger.warning(f"Progress update conflict for user {user_id}, attempt {attempt}")

        raise ConflictException('Progress was updated concurrently, please retry')

    def _apply_once(self, user_id, repetitions: int, duration_seconds: int) -> Optional[ProgressDelta]:
        now = utc_now()
        today = local_date(now)

        record = self.profile_repo.load(user_id)
        if record is None:
            record = self.profile_repo.stage_new(user_id)
        past_results = [to_result_sample(r) for r in self.result_repo.query_by_user(user_id)]

        new_sample = ResultSample(repetitions=repetitions, duration_seconds=duration_seconds, day=today)
        delta = apply_result(to_profile_state(record), past_results, new_sample, today)

        self.result_repo.append(SessionResult(
            user_id=user_id,
            repetitions=repetitions,
            duration_seconds=duration_seconds,
            recorded_at=now,
        ))
        updated = delta.profile
        record.xp = updated.xp
        record.level = updated.level
        record.unlocked_achievements = list(updated.unlocked_achievements)
        record.current_streak = updated.current_streak
        record.last_active_date = updated.last_active_date
        record.best_session_repetitions = updated.best_session_repetitions

        if self.profile_repo.save() == SaveOutcome.CONFLICT:
            return None
        return delta

    def get_progress(self, current_user: User) -> ProgressResponse:
        record = self.profile_repo.load(current_user.user_id)
        state = to_profile_state(record) if record is not None else ProfileState()
        unlocked = set(state.unlocked_achievements)

        achievements: List[AchievementStatus] = [
            AchievementStatus(**a.to_dict(), unlocked=a.id in unlocked) for a in ACHIEVEMENTS
        ]
        return ProgressResponse(
            xp=state.xp,
            level=state.level,
            currentStreak=state.current_streak,
            lastActiveDate=state.last_active_date,
            bestSessionRepetitions=state.best_session_repetitions,
            nextLevelXp=xp_for_level(state.level + 1),
            achievements=achievements,
        )
