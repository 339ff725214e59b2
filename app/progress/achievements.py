"""
Achievement catalog.

Each achievement unlocks from a predicate over the aggregate values computed
when a session is saved. The catalog is fixed at import time and its order is
the order newly unlocked achievements are reported in.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple


@dataclass(frozen=True)
class ProgressAggregates:
    """
    Values achievement predicates are evaluated against.

    Attributes:
        total_repetitions_all_time: Sum of repetitions over every saved session.
        best_session_repetitions: Highest repetitions in a single session.
        current_streak: Consecutive active days, including today.
        repetitions_today: Sum of repetitions of sessions dated today.
        sessions_today: Number of sessions dated today.
    """
    total_repetitions_all_time: int = 0
    best_session_repetitions: int = 0
    current_streak: int = 0
    repetitions_today: int = 0
    sessions_today: int = 0


@dataclass(frozen=True)
class AchievementDefinition:
    id: str
    name: str
    description: str
    icon: str
    unlock_predicate: Callable[[ProgressAggregates], bool]

    def is_met(self, aggregates: ProgressAggregates) -> bool:
        return bool(self.unlock_predicate(aggregates))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "icon": self.icon,
        }


ACHIEVEMENTS: Tuple[AchievementDefinition, ...] = (
    AchievementDefinition(
        id="first_blood",
        name="First Blood",
        description="Complete your first repetition.",
        icon="🩸",
        unlock_predicate=lambda a: a.total_repetitions_all_time >= 1,
    ),
    AchievementDefinition(
        id="century_club",
        name="Century Club",
        description="Reach 100 repetitions in total.",
        icon="💯",
        unlock_predicate=lambda a: a.total_repetitions_all_time >= 100,
    ),
    AchievementDefinition(
        id="iron_streak",
        name="Iron Streak",
        description="Train 5 days in a row.",
        icon="🔥",
        unlock_predicate=lambda a: a.current_streak >= 5,
    ),
    AchievementDefinition(
        id="consistency_hero",
        name="Consistency Hero",
        description="Train 30 days in a row.",
        icon="🏆",
        unlock_predicate=lambda a: a.current_streak >= 30,
    ),
    AchievementDefinition(
        id="daily_grind",
        name="Daily Grind",
        description="Do 20 repetitions in a single day.",
        icon="💪",
        unlock_predicate=lambda a: a.repetitions_today >= 20,
    ),
    AchievementDefinition(
        id="tier_beginner",
        name="Beginner Tier",
        description="Best session of 15+ reps, a 3 day streak and 100 total reps.",
        icon="🥉",
        unlock_predicate=lambda a: (
            a.best_session_repetitions >= 15
            and a.current_streak >= 3
            and a.total_repetitions_all_time >= 100
        ),
    ),
    AchievementDefinition(
        id="tier_intermediate",
        name="Intermediate Tier",
        description="Best session of 30+ reps, 3 sessions in a day and 500 total reps.",
        icon="🥈",
        unlock_predicate=lambda a: (
            a.best_session_repetitions >= 30
            and a.sessions_today >= 3
            and a.total_repetitions_all_time >= 500
        ),
    ),
    AchievementDefinition(
        id="tier_advanced",
        name="Advanced Tier",
        description="Best session of 50+ reps, a 7 day streak and 1000 total reps.",
        icon="🥇",
        unlock_predicate=lambda a: (
            a.best_session_repetitions >= 50
            and a.current_streak >= 7
            and a.total_repetitions_all_time >= 1000
        ),
    ),
)

ACHIEVEMENTS_BY_ID: Dict[str, AchievementDefinition] = {a.id: a for a in ACHIEVEMENTS}


def get_catalog() -> List[AchievementDefinition]:
    """Catalog in its fixed order."""
    return list(ACHIEVEMENTS)
