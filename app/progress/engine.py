"""
Progress Engine.

Turns a saved session into XP, level, streak and achievement changes:

    XP:      xp_gained = repetitions * 10
    Level:   level = floor(sqrt(xp / 100)) + 1
    Streak:  same day -> unchanged, next day -> +1, gap -> reset to 1
    Unlocks: every not-yet-unlocked achievement whose predicate holds

All functions are pure. `apply_result` works on a copy of the profile and
returns it; persisting the copy is the caller's job.
"""

import logging
import math
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Iterable, List, Optional, Sequence, Tuple

from .achievements import ACHIEVEMENTS, AchievementDefinition, ProgressAggregates

logger = logging.getLogger(__name__)

XP_PER_REPETITION = 10
XP_PER_LEVEL_UNIT = 100


@dataclass(frozen=True)
class ResultSample:
    """One saved session as the engine sees it."""
    repetitions: int
    duration_seconds: int
    day: date


@dataclass
class ProfileState:
    """
    In-memory copy of a user's progress.

    Attributes:
        xp: Experience points, never decreases.
        level: Always floor(sqrt(xp / 100)) + 1.
        unlocked_achievements: Ids of unlocked achievements, only grows.
        current_streak: Consecutive active days.
        last_active_date: Last calendar day a session was saved, or None.
        best_session_repetitions: Best single-session repetitions.
    """
    xp: int = 0
    level: int = 1
    unlocked_achievements: List[str] = field(default_factory=list)
    current_streak: int = 0
    last_active_date: Optional[date] = None
    best_session_repetitions: int = 0

    def copy(self) -> "ProfileState":
        return replace(self, unlocked_achievements=list(self.unlocked_achievements))


@dataclass
class ProgressDelta:
    xp_gained: int
    new_level: int
    level_up: bool
    newly_unlocked: List[AchievementDefinition] = field(default_factory=list)
    profile: Optional[ProfileState] = None


def level_for_xp(xp: int) -> int:
    # isqrt keeps the boundary exact: 100 xp is level 2, 399 is still level 2
    return math.isqrt(max(xp, 0) // XP_PER_LEVEL_UNIT) + 1


def xp_for_level(level: int) -> int:
    """Minimum xp needed to reach `level`."""
    return (max(level, 1) - 1) ** 2 * XP_PER_LEVEL_UNIT


def next_streak(current_streak: int, last_active_date: Optional[date], today: date) -> Tuple[int, Optional[date]]:
    """
    Compute the streak and last active date after activity on `today`.

    A `today` earlier than `last_active_date` (backdated result or clock skew)
    leaves both values untouched.
    """
    if last_active_date is None:
        return 1, today

    day_delta = (today - last_active_date).days
    if day_delta < 0:
        logger.warning(
            f"Result dated {today} is before last active date {last_active_date}; "
            f"streak left unchanged"
        )
        return current_streak, last_active_date
    if day_delta == 0:
        return current_streak, today
    if day_delta == 1:
        return current_streak + 1, today
    return 1, today


def compute_aggregates(
    results: Iterable[ResultSample],
    today: date,
    best_session_repetitions: int,
    current_streak: int,
) -> ProgressAggregates:
    total = 0
    reps_today = 0
    sessions_today = 0
    for result in results:
        total += result.repetitions
        if result.day == today:
            reps_today += result.repetitions
            sessions_today += 1

    return ProgressAggregates(
        total_repetitions_all_time=total,
        best_session_repetitions=best_session_repetitions,
        current_streak=current_streak,
        repetitions_today=reps_today,
        sessions_today=sessions_today,
    )


def evaluate_unlocks(
    profile: ProfileState,
    aggregates: ProgressAggregates,
    catalog: Sequence[AchievementDefinition] = ACHIEVEMENTS,
) -> List[AchievementDefinition]:
    """
    Unlock every achievement whose predicate holds and that the profile
    does not already have. Mutates `profile.unlocked_achievements`.

    Returns:
        Newly unlocked achievements in catalog order. Empty on replay.
    """
    unlocked = set(profile.unlocked_achievements)
    newly_unlocked = []
    for achievement in catalog:
        if achievement.id in unlocked:
            continue
        if achievement.is_met(aggregates):
            newly_unlocked.append(achievement)
            unlocked.add(achievement.id)

    if newly_unlocked:
        profile.unlocked_achievements = profile.unlocked_achievements + [a.id for a in newly_unlocked]
    return newly_unlocked


def apply_result(
    profile: ProfileState,
    past_results: Sequence[ResultSample],
    new_result: ResultSample,
    today: date,
    catalog: Sequence[AchievementDefinition] = ACHIEVEMENTS,
) -> ProgressDelta:
    """
    Apply one newly saved session to a profile.

    Args:
        profile: Current profile. Not modified.
        past_results: Previously saved sessions of the same user, excluding `new_result`.
        new_result: The session being saved.
        today: Calendar day streak and "today" aggregates are computed for.
        catalog: Achievements to evaluate.

    Returns:
        ProgressDelta whose `profile` is the updated copy.
    """
    updated = profile.copy()

    xp_gained = new_result.repetitions * XP_PER_REPETITION
    updated.xp += xp_gained

    new_level = level_for_xp(updated.xp)
    level_up = new_level > updated.level
    updated.level = new_level

    updated.current_streak, updated.last_active_date = next_streak(
        updated.current_streak, updated.last_active_date, today
    )

    updated.best_session_repetitions = max(updated.best_session_repetitions, new_result.repetitions)

    aggregates = compute_aggregates(
        list(past_results) + [new_result],
        today,
        best_session_repetitions=updated.best_session_repetitions,
        current_streak=updated.current_streak,
    )
    newly_unlocked = evaluate_unlocks(updated, aggregates, catalog)

    if level_up:
        logger.info(f"Level up: {profile.level} -> {new_level} (xp={updated.xp})")
    for achievement in newly_unlocked:
        logger.info(f"Achievement unlocked: {achievement.id}")

    return ProgressDelta(
        xp_gained=xp_gained,
        new_level=new_level,
        level_up=level_up,
        newly_unlocked=newly_unlocked,
        profile=updated,
    )
