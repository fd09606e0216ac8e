"""Pure statistics engine for Life Weeks.

No database, no I/O: a birthdate and an explicit "now" go in, an immutable
StatisticsRecord comes out. The clock is always read by the caller.

Every illustrative estimate is a row of RATE_TABLE, evaluated in IEEE-754
double arithmetic, multiplying or dividing as each rule says, so
``floor(180 * 0.35)`` is 62, not 63.
"""

import logging
import math
from dataclasses import asdict, dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from fractions import Fraction
from typing import Any, Dict, Tuple, Union

from ..domain.errors import InvalidInput

logger = logging.getLogger(__name__)

WEEKS_PER_YEAR = 52
MIN_HORIZON_YEARS = 90
HORIZON_MARGIN_YEARS = 10

MS_PER_DAY = 24 * 60 * 60 * 1000
MS_PER_WEEK = 7 * MS_PER_DAY
MS_PER_YEAR = 365.25 * MS_PER_DAY

DateLike = Union[str, date, datetime]
Number = Union[int, float]


class Rounding(str, Enum):
    FLOOR = "floor"
    ROUND = "round"


@dataclass(frozen=True)
class RateRule:
    """One derived statistic: ``rounding(basis * rate)``, or ``basis / rate``
    when ``divide`` is set."""

    field: str
    basis: str
    rate: float
    rounding: Rounding = Rounding.FLOOR
    divide: bool = False

    def apply(self, basis_value: Number) -> int:
        if self.divide:
            value = basis_value / self.rate
        else:
            value = basis_value * self.rate
        if self.rounding is Rounding.ROUND:
            return round_half_up(value)
        return math.floor(value)


def _per(field: str, basis: str, divisor: float) -> RateRule:
    return RateRule(field, basis, divisor, divide=True)


# Order matters: a rule may use an earlier rule's field as its basis.
RATE_TABLE: Tuple[RateRule, ...] = (
    # Temporal
    RateRule("hours_lived", "days_lived", 24),
    RateRule("minutes_lived", "days_lived", 24 * 60),
    RateRule("seconds_lived", "days_lived", 24 * 60 * 60),
    # Biological
    RateRule("heartbeats", "days_lived", 24 * 60 * 70),  # 70 bpm
    RateRule("breaths", "days_lived", 24 * 60 * 16),  # 16 per minute
    RateRule("hours_slept", "days_lived", 8),
    RateRule("blinks", "days_lived", 17280),
    # Environmental
    _per("seasons_experienced", "days_lived", 91.25),
    _per("full_moons_witnessed", "days_lived", 29.5),
    # Cosmic
    RateRule("earth_travel_distance_km", "days_lived", 2.6e6, Rounding.ROUND),
    RateRule("solar_system_travel_km", "days_lived", 24 * 828000, Rounding.ROUND),
    # Social & cultural
    RateRule("words_spoken", "days_lived", 16000),
    RateRule("steps_taken", "days_lived", 7500),
    RateRule("meals_eaten", "days_lived", 3),
    RateRule("times_smiled", "days_lived", 20),
    RateRule("movies_watched", "days_lived", 0.33),
    RateRule("songs_heard", "days_lived", 25),
    # Learning
    _per("books_could_read", "days_lived", 7),
    RateRule("skill_hours_available", "days_lived", 2),
    _per("languages_could_learn", "years_lived", 2),
    _per("degrees_equivalent", "skill_hours_available", 1440),
    # Digital life
    RateRule("internet_hours", "days_lived", 6.5),
    RateRule("phone_checks", "days_lived", 96),
    RateRule("emails_sent", "days_lived", 12),
    RateRule("photos_could_take", "days_lived", 50),
    # Health
    RateRule("water_consumed_liters", "days_lived", 2.2),
    RateRule("calories_consumed", "days_lived", 2000),
    RateRule("hair_growth_mm", "days_lived", 0.35),
    RateRule("fingernail_growth_mm", "days_lived", 0.1),
    # Memories & experiences
    RateRule("memories_formed", "days_lived", 50),
    RateRule("dreams_had", "hours_slept", 4 / 8),  # 4 dreams per 8h night
    RateRule("times_laughed", "days_lived", 17),
    RateRule("conversations_had", "days_lived", 7),
)


@dataclass(frozen=True)
class StatisticsRecord:
    """Snapshot of everything derived from one (birthdate, now) pair."""

    # Temporal
    weeks_lived: int
    total_weeks: int
    weeks_remaining: int
    percentage_lived: int
    max_age_years: int
    days_lived: int
    hours_lived: int
    minutes_lived: int
    seconds_lived: int
    years_lived: float
    age_years: float
    birth_year: int
    birth_month: int
    # Biological
    heartbeats: int
    breaths: int
    hours_slept: int
    sleep_years: int
    blinks: int
    # Environmental
    seasons_experienced: int
    full_moons_witnessed: int
    # Cosmic
    earth_orbits: float
    earth_travel_distance_km: int
    solar_system_travel_km: int
    # Social & cultural
    words_spoken: int
    steps_taken: int
    meals_eaten: int
    times_smiled: int
    movies_watched: int
    songs_heard: int
    # Learning
    books_could_read: int
    skill_hours_available: int
    languages_could_learn: int
    degrees_equivalent: int
    # Digital life
    internet_hours: int
    phone_checks: int
    emails_sent: int
    photos_could_take: int
    # Health
    water_consumed_liters: int
    calories_consumed: int
    hair_growth_mm: int
    fingernail_growth_mm: int
    # Memories & experiences
    memories_formed: int
    dreams_had: int
    times_laughed: int
    conversations_had: int

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def round_half_up(value: Union[Number, Fraction]) -> int:
    """Round to the nearest integer, halves up for non-negatives.

    Floats are taken at their exact binary value, so 2.4999999999999996
    rounds down even though it prints close to 2.5.
    """
    return math.floor(Fraction(value) + Fraction(1, 2))


def _round_places(value: float, places: int) -> float:
    # Half up on the exact binary value
    scale = 10**places
    return round_half_up(Fraction(value) * scale) / scale


def _to_local_naive(moment: datetime) -> datetime:
    if moment.tzinfo is not None:
        return moment.astimezone().replace(tzinfo=None)
    return moment


def parse_birthdate(value: Any, name: str = "birthdate") -> datetime:
    """Coerce a date, datetime, or ISO string into a naive local datetime.

    Args:
        value: ``YYYY-MM-DD`` string, ISO datetime string, date or datetime.
        name: Argument name used in error messages.

    Returns:
        Naive datetime; plain dates resolve to local midnight.

    Raises:
        InvalidInput: If the value is missing or cannot be parsed.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidInput(f"{name} is required", value)

    if isinstance(value, datetime):
        return _to_local_naive(value)

    if isinstance(value, date):
        return datetime.combine(value, time())

    if not isinstance(value, str):
        raise InvalidInput(
            f"{name} must be a date or ISO string, got {type(value).__name__}", value
        )

    text = value.strip()
    try:
        if len(text) == 10:
            return datetime.combine(date.fromisoformat(text), time())
        return _to_local_naive(datetime.fromisoformat(text))
    except ValueError as e:
        raise InvalidInput(
            f"Invalid date format for {name}. Expected YYYY-MM-DD: {e}", value
        ) from e


def compute_statistics(birthdate: DateLike, now: DateLike) -> StatisticsRecord:
    """Derive the full statistics record for a birthdate at a given moment.

    Args:
        birthdate: Date of birth (date, datetime or ISO string).
        now: The reference moment. Supplied by the caller, never read here.

    Returns:
        Immutable StatisticsRecord. Identical inputs give identical output.

    Raises:
        InvalidInput: If birthdate is unparseable or after ``now``.
    """
    born = parse_birthdate(birthdate)
    moment = parse_birthdate(now, name="now")

    if born > moment:
        raise InvalidInput(
            f"birthdate ({born.date().isoformat()}) cannot be in the future "
            f"relative to now ({moment.isoformat()})",
            birthdate,
        )

    # Single elapsed value, truncated to whole milliseconds
    elapsed_ms = (moment - born) // timedelta(milliseconds=1)

    years_lived = elapsed_ms / MS_PER_YEAR
    days_lived = elapsed_ms // MS_PER_DAY
    weeks_lived = elapsed_ms // MS_PER_WEEK

    max_age_years = max(MIN_HORIZON_YEARS, math.ceil(years_lived) + HORIZON_MARGIN_YEARS)
    total_weeks = max_age_years * WEEKS_PER_YEAR
    weeks_remaining = max(0, total_weeks - weeks_lived)
    percentage_lived = min(
        100, max(0, round_half_up(weeks_lived / total_weeks * 100))
    )

    basis: Dict[str, Number] = {
        "days_lived": days_lived,
        "years_lived": years_lived,
    }
    for rule in RATE_TABLE:
        basis[rule.field] = rule.apply(basis[rule.basis])

    derived = {rule.field: basis[rule.field] for rule in RATE_TABLE}

    record = StatisticsRecord(
        weeks_lived=weeks_lived,
        total_weeks=total_weeks,
        weeks_remaining=weeks_remaining,
        percentage_lived=percentage_lived,
        max_age_years=max_age_years,
        days_lived=days_lived,
        years_lived=years_lived,
        age_years=_round_places(years_lived, 1),
        birth_year=born.year,
        birth_month=born.month,
        sleep_years=round_half_up(derived["hours_slept"] / 24 / 365),
        earth_orbits=_round_places(years_lived, 2),
        **derived,
    )

    logger.debug(
        "Computed statistics: weeks_lived=%d total_weeks=%d percentage=%d",
        record.weeks_lived,
        record.total_weeks,
        record.percentage_lived,
    )
    return record
