"""SQLAlchemy implementation of PreferencesRepository."""

import logging
from datetime import date
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from life_weeks.models.preferences import ViewerPreferences

logger = logging.getLogger(__name__)


class SqlAlchemyPreferencesRepository:
    """Concrete PreferencesRepository backed by SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, profile: str) -> Optional[ViewerPreferences]:
        result = await self._session.execute(
            select(ViewerPreferences).where(ViewerPreferences.profile == profile)
        )
        return result.scalar_one_or_none()

    async def _get_or_create(self, profile: str) -> ViewerPreferences:
        prefs = await self.get(profile)
        if prefs is None:
            prefs = ViewerPreferences(profile=profile)
            self._session.add(prefs)
        return prefs

    async def save_birthdate(self, profile: str, birth_date: date) -> ViewerPreferences:
        prefs = await self._get_or_create(profile)
        prefs.date_of_birth = birth_date.isoformat()
        await self._session.commit()
        logger.info("Saved birthdate for profile %s", profile)
        return prefs

    async def set_dark_mode(self, profile: str, enabled: bool) -> ViewerPreferences:
        prefs = await self._get_or_create(profile)
        prefs.dark_mode = enabled
        await self._session.commit()
        return prefs

    async def toggle_dark_mode(self, profile: str) -> bool:
        prefs = await self._get_or_create(profile)
        prefs.dark_mode = not prefs.dark_mode
        await self._session.commit()
        return prefs.dark_mode

    async def reset(self, profile: str) -> None:
        prefs = await self.get(profile)
        if prefs is None:
            return
        prefs.date_of_birth = None
        await self._session.commit()
        logger.info("Cleared birthdate for profile %s", profile)
