"""Viewer preferences model.

Owns: last entered date_of_birth and the dark-mode flag, per profile.
Computed statistics are never stored.
"""

from typing import Optional

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class ViewerPreferences(Base, TimestampMixin):
    """Per-profile Life Weeks preferences."""

    __tablename__ = "viewer_preferences"

    profile: Mapped[str] = mapped_column(String(64), primary_key=True)

    date_of_birth: Mapped[Optional[str]] = mapped_column(
        String(32), nullable=True
    )  # YYYY-MM-DD format

    dark_mode: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    def __init__(self, **kwargs):
        kwargs.setdefault("date_of_birth", None)
        kwargs.setdefault("dark_mode", False)
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        return (
            f"<ViewerPreferences(profile={self.profile}, "
            f"dark_mode={self.dark_mode})>"
        )
