from datetime import date
from typing import List, Optional

from pydantic import BaseModel


class AchievementStatus(BaseModel):
    id: str
    name: str
    description: str
    icon: str
    unlocked: bool = False


class ProgressResponse(BaseModel):
    xp: int
    level: int
    currentStreak: int
    lastActiveDate: Optional[date] = None
    bestSessionRepetitions: int
    nextLevelXp: int
    achievements: List[AchievementStatus] = []
