"""Week grid model: classifies each week of the projected lifespan.

Stateless. Every query is a constant-time comparison against
``stats.weeks_lived`` so renderers can ask once per cell.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional

from ..domain.errors import IndexOutOfRange
from .life_stats import WEEKS_PER_YEAR, StatisticsRecord

CURRENT_WEEK_LABEL = "Current week"


class WeekState(str, Enum):
    PAST = "past"
    CURRENT = "current"
    FUTURE = "future"


@dataclass(frozen=True)
class WeekDescription:
    """Tooltip facts for one grid cell."""

    week_index: int
    state: WeekState
    age_years: Optional[int]
    age_weeks: Optional[int]
    label: str


def _check_range(week_index: int, stats: StatisticsRecord) -> None:
    if week_index < 0 or week_index >= stats.total_weeks:
        raise IndexOutOfRange(week_index, stats.total_weeks)


def classify(week_index: int, stats: StatisticsRecord) -> WeekState:
    """Classify a week index as past, current, or future.

    Raises:
        IndexOutOfRange: If week_index is outside [0, total_weeks).
    """
    _check_range(week_index, stats)

    if week_index < stats.weeks_lived:
        return WeekState.PAST
    if week_index == stats.weeks_lived:
        return WeekState.CURRENT
    return WeekState.FUTURE


def describe(week_index: int, stats: StatisticsRecord) -> WeekDescription:
    """Describe a week index for a tooltip.

    Past weeks read "Age 3 years, 12 weeks", future weeks "Future age 40
    years", and the current week carries the fixed current marker with no
    age fields.

    Raises:
        IndexOutOfRange: If week_index is outside [0, total_weeks).
    """
    state = classify(week_index, stats)

    if state is WeekState.CURRENT:
        return WeekDescription(
            week_index=week_index,
            state=state,
            age_years=None,
            age_weeks=None,
            label=CURRENT_WEEK_LABEL,
        )

    age_years, age_weeks = divmod(week_index, WEEKS_PER_YEAR)
    if state is WeekState.PAST:
        label = f"Age {age_years} years, {age_weeks} weeks"
    else:
        label = f"Future age {age_years} years"

    return WeekDescription(
        week_index=week_index,
        state=state,
        age_years=age_years,
        age_weeks=age_weeks,
        label=label,
    )


def iter_rows(
    stats: StatisticsRecord, weeks_per_row: int = WEEKS_PER_YEAR
) -> Iterator[List[WeekState]]:
    """Yield the grid row by row; only the last row may be short."""
    for start in range(0, stats.total_weeks, weeks_per_row):
        stop = min(start + weeks_per_row, stats.total_weeks)
        yield [classify(index, stats) for index in range(start, stop)]


def count_states(stats: StatisticsRecord) -> Dict[WeekState, int]:
    """Number of cells in each state."""
    past = min(stats.weeks_lived, stats.total_weeks)
    current = 1 if stats.weeks_lived < stats.total_weeks else 0
    return {
        WeekState.PAST: past,
        WeekState.CURRENT: current,
        WeekState.FUTURE: stats.total_weeks - past - current,
    }
