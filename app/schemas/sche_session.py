from datetime import date, datetime
from typing import List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt

MAX_SESSION_SECONDS = 24 * 60 * 60
MAX_SESSION_REPETITIONS = 100_000


class SaveSessionRequest(BaseModel):
    time: StrictFloat = Field(..., ge=0, le=MAX_SESSION_SECONDS, allow_inf_nan=False, description="Session duration in seconds")
    rep: StrictInt = Field(..., ge=0, le=MAX_SESSION_REPETITIONS, description="Repetitions completed")


class AchievementItem(BaseModel):
    id: str
    name: str
    description: str
    icon: str


class SaveSessionResponse(BaseModel):
    success: bool = True
    xpGained: int
    newLevel: int
    levelUp: bool
    newAchievements: List[AchievementItem] = []


class SessionResultItem(BaseModel):
    result_id: UUID
    rep: int = Field(validation_alias='repetitions')
    time: int = Field(validation_alias='duration_seconds')
    date: datetime = Field(validation_alias='recorded_at')

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class HistorySummary(BaseModel):
    totalReps: int = 0
    totalTime: int = 0
    totalCalories: float = 0.0
    sessionCount: int = 0


class DailyStat(BaseModel):
    date: date
    totalReps: int = 0
    totalTime: int = 0
    totalCalories: float = 0.0


class HistoryResponse(BaseModel):
    success: bool = True
    summary: HistorySummary
    dailyStats: List[DailyStat] = []
    recentSessions: List[SessionResultItem] = []

