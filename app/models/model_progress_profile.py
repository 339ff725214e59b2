from sqlalchemy import Column, Integer, Date, DateTime, ForeignKey, JSON, func, Uuid
from app.models.model_base import Base

class ProgressProfile(Base):
    __tablename__ = "progress_profiles"

    user_id = Column(Uuid, ForeignKey("users.user_id", ondelete="CASCADE"), primary_key=True)
    xp = Column(Integer, nullable=False, default=0)
    level = Column(Integer, nullable=False, default=1)
    unlocked_achievements = Column(JSON, nullable=False, default=list)
    current_streak = Column(Integer, nullable=False, default=0)
    last_active_date = Column(Date)
    best_session_repetitions = Column(Integer, nullable=False, default=0)
    version = Column(Integer, nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    # Optimistic locking: UPDATE ... WHERE version = :old raises StaleDataError on conflict
    __mapper_args__ = {"version_id_col": version}
