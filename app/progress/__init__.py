from .achievements import (
    ACHIEVEMENTS,
    ACHIEVEMENTS_BY_ID,
    AchievementDefinition,
    ProgressAggregates,
    get_catalog,
)
from .engine import (
    ProfileState,
    ProgressDelta,
    ResultSample,
    apply_result,
    compute_aggregates,
    evaluate_unlocks,
    level_for_xp,
    next_streak,
    xp_for_level,
)
from .history import DailyTotals, HistoryReport, aggregate_history

__all__ = [
    "ACHIEVEMENTS",
    "ACHIEVEMENTS_BY_ID",
    "AchievementDefinition",
    "ProgressAggregates",
    "get_catalog",
    "ProfileState",
    "ProgressDelta",
    "ResultSample",
    "apply_result",
    "compute_aggregates",
    "evaluate_unlocks",
    "level_for_xp",
    "next_streak",
    "xp_for_level",
    "DailyTotals",
    "HistoryReport",
    "aggregate_history",
]
