from typing import Optional
from fastapi import Depends
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError
from app.db.base import get_db
from app.helpers.enums import SaveOutcome
from app.models.model_progress_profile import ProgressProfile

class ProgressProfileRepository:
    def __init__(self, db_session: Session = Depends(get_db)):
        self.db = db_session

    def load(self, user_id) -> Optional[ProgressProfile]:
        return self.db.query(ProgressProfile).filter(ProgressProfile.user_id == user_id).first()

    def stage_new(self, user_id) -> ProgressProfile:
        profile = ProgressProfile(
            user_id=user_id,
            xp=0,
            level=1,
            unlocked_achievements=[],
            current_streak=0,
            last_active_date=None,
            best_session_repetitions=0,
        )
        self.db.add(profile)
        return profile

    def save(self) -> SaveOutcome:
        """
        Commit everything staged in the session in one transaction.

        Returns CONFLICT when another writer updated the profile since it was
        loaded (or created it first); the transaction is rolled back in that
        case. Other database errors roll back and propagate.
        """
        try:
            self.db.commit()
        except (StaleDataError, IntegrityError):
            self.db.rollback()
            return SaveOutcome.CONFLICT
        except Exception:
            self.db.rollback()
            raise
        return SaveOutcome.SAVED

    def discard(self) -> None:
        self.db.rollback()
