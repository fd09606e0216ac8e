import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Response
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import get_settings
from ..core.database import get_db_session_dependency
from ..infrastructure.repositories import SqlAlchemyPreferencesRepository
from ..models.preferences import ViewerPreferences
from ..services.life_facts import first_fact, get_facts
from ..services.life_stats import StatisticsRecord, compute_statistics, parse_birthdate
from ..services.life_weeks_image import share_filename, share_image_bytes
from ..services.week_grid import count_states, describe

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["life-weeks"])


# Request/Response models
class StatsRequest(BaseModel):
    birthdate: str
    now: Optional[datetime] = None


class StatsResponse(BaseModel):
    computed_at: datetime
    stats: Dict[str, Any]


class WeekDescriptionResponse(BaseModel):
    week_index: int
    state: str
    age_years: Optional[int]
    age_weeks: Optional[int]
    label: str


class GridSummaryResponse(BaseModel):
    total_weeks: int
    weeks_lived: int
    weeks_per_row: int
    rows: int
    counts: Dict[str, int]


class FactsResponse(BaseModel):
    facts: List[str]
    current: str
    rotation_seconds: int


class PreferencesUpdate(BaseModel):
    birthdate: Optional[str] = None
    dark_mode: Optional[bool] = None


class PreferencesResponse(BaseModel):
    profile: str
    birthdate: Optional[str]
    dark_mode: bool


def _stats_for(birthdate: str, now: Optional[datetime]) -> tuple[datetime, StatisticsRecord]:
    moment = now or datetime.now()
    return moment, compute_statistics(birthdate, moment)


@router.post("/stats", response_model=StatsResponse)
async def post_stats(request: StatsRequest) -> StatsResponse:
    """Compute the statistics record for a birthdate."""
    moment, stats = _stats_for(request.birthdate, request.now)
    return StatsResponse(computed_at=moment, stats=stats.as_dict())


@router.get("/grid", response_model=GridSummaryResponse)
async def get_grid(birthdate: str, now: Optional[datetime] = None) -> GridSummaryResponse:
    """Summarize the week grid: size and cells per state."""
    _, stats = _stats_for(birthdate, now)
    counts = count_states(stats)
    return GridSummaryResponse(
        total_weeks=stats.total_weeks,
        weeks_lived=stats.weeks_lived,
        weeks_per_row=52,
        rows=stats.max_age_years,
        counts={state.value: count for state, count in counts.items()},
    )


@router.get("/grid/{week_index}", response_model=WeekDescriptionResponse)
async def get_week(
    week_index: int, birthdate: str, now: Optional[datetime] = None
) -> WeekDescriptionResponse:
    """Classify and describe a single week cell."""
    _, stats = _stats_for(birthdate, now)
    description = describe(week_index, stats)
    return WeekDescriptionResponse(
        week_index=description.week_index,
        state=description.state.value,
        age_years=description.age_years,
        age_weeks=description.age_weeks,
        label=description.label,
    )


@router.get("/facts", response_model=FactsResponse)
async def get_fact_list(
    birthdate: Optional[str] = None, now: Optional[datetime] = None
) -> FactsResponse:
    """Facts for the rotating banner, personalized when a birthdate is given."""
    stats = _stats_for(birthdate, now)[1] if birthdate else None
    facts = get_facts(stats)
    return FactsResponse(
        facts=facts,
        current=first_fact(facts),
        rotation_seconds=get_settings().fact_rotation_seconds,
    )


@router.get("/share.png")
async def get_share_image(
    birthdate: str,
    dark_mode: bool = False,
    compact: bool = False,
    now: Optional[datetime] = None,
) -> Response:
    """Render the share card as a PNG download."""
    moment, stats = _stats_for(birthdate, now)
    data = await run_in_threadpool(
        share_image_bytes, stats, dark_mode=dark_mode, compact=compact
    )
    filename = share_filename(parse_birthdate(moment, name="now").date())
    return Response(
        content=data,
        media_type="image/png",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def _preferences_response(
    profile: str, prefs: Optional[ViewerPreferences]
) -> PreferencesResponse:
    if prefs is None:
        return PreferencesResponse(profile=profile, birthdate=None, dark_mode=False)
    return PreferencesResponse(
        profile=profile, birthdate=prefs.date_of_birth, dark_mode=prefs.dark_mode
    )


@router.get("/preferences", response_model=PreferencesResponse)
async def get_preferences(
    session: AsyncSession = Depends(get_db_session_dependency),
) -> PreferencesResponse:
    """Return the remembered birthdate and theme flag."""
    profile = get_settings().default_profile
    repo = SqlAlchemyPreferencesRepository(session)
    return _preferences_response(profile, await repo.get(profile))


@router.put("/preferences", response_model=PreferencesResponse)
async def put_preferences(
    update: PreferencesUpdate,
    session: AsyncSession = Depends(get_db_session_dependency),
) -> PreferencesResponse:
    """Remember a birthdate and/or the theme flag."""
    profile = get_settings().default_profile
    repo = SqlAlchemyPreferencesRepository(session)

    if update.birthdate is not None:
        born = parse_birthdate(update.birthdate)
        # Rejects future dates before anything is stored
        compute_statistics(born, datetime.now())
        await repo.save_birthdate(profile, born.date())
        logger.info(f"Stored birthdate for profile {profile}")
    if update.dark_mode is not None:
        await repo.set_dark_mode(profile, update.dark_mode)

    return _preferences_response(profile, await repo.get(profile))


@router.post("/preferences/toggle-dark-mode", response_model=PreferencesResponse)
async def toggle_dark_mode(
    session: AsyncSession = Depends(get_db_session_dependency),
) -> PreferencesResponse:
    """Flip the dark-mode flag."""
    profile = get_settings().default_profile
    repo = SqlAlchemyPreferencesRepository(session)
    await repo.toggle_dark_mode(profile)
    return _preferences_response(profile, await repo.get(profile))


@router.delete("/preferences", response_model=PreferencesResponse)
async def reset_preferences(
    session: AsyncSession = Depends(get_db_session_dependency),
) -> PreferencesResponse:
    """Forget the birthdate (reset); the theme flag is kept."""
    profile = get_settings().default_profile
    repo = SqlAlchemyPreferencesRepository(session)
    await repo.reset(profile)
    return _preferences_response(profile, await repo.get(profile))
