"""
History aggregation.

Rolls saved sessions up into per-day totals and a summary over a date range.
Calories are an estimate of half a kcal per repetition.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List

from .engine import ResultSample

CALORIES_PER_REPETITION = 0.5


@dataclass
class DailyTotals:
    day: date
    total_reps: int = 0
    total_time: int = 0

    @property
    def total_calories(self) -> float:
        return self.total_reps * CALORIES_PER_REPETITION


@dataclass
class HistoryReport:
    days: List[DailyTotals] = field(default_factory=list)
    total_reps: int = 0
    total_time: int = 0
    session_count: int = 0

    @property
    def total_calories(self) -> float:
        return self.total_reps * CALORIES_PER_REPETITION


def aggregate_history(results: Iterable[ResultSample]) -> HistoryReport:
    """Group `results` by calendar day, ascending, and total them."""
    per_day: Dict[date, DailyTotals] = {}
    report = HistoryReport()

    for result in results:
        totals = per_day.get(result.day)
        if totals is None:
            totals = per_day[result.day] = DailyTotals(day=result.day)
        totals.total_reps += result.repetitions
        totals.total_time += result.duration_seconds

        report.total_reps += result.repetitions
        report.total_time += result.duration_seconds
        report.session_count += 1

    report.days = [per_day[day] for day in sorted(per_day)]
    return report
