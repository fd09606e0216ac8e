"""PreferencesRepository protocol: defines the preferences storage contract."""

from datetime import date
from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ...models.preferences import ViewerPreferences


@runtime_checkable
class PreferencesRepository(Protocol):
    """Repository interface for the last birthdate and the theme flag."""

    async def get(self, profile: str) -> Optional["ViewerPreferences"]:
        """Return the stored preferences for a profile, or None."""
        ...

    async def save_birthdate(self, profile: str, birth_date: date) -> "ViewerPreferences":
        """Remember the last entered birthdate."""
        ...

    async def set_dark_mode(self, profile: str, enabled: bool) -> "ViewerPreferences":
        """Store the dark-mode flag."""
        ...

    async def toggle_dark_mode(self, profile: str) -> bool:
        """Flip the dark-mode flag and return the new value."""
        ...

    async def reset(self, profile: str) -> None:
        """Forget the birthdate; the theme flag survives."""
        ...
