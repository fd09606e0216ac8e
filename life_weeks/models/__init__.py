from .base import Base, TimestampMixin
from .preferences import ViewerPreferences

__all__ = [
    "Base",
    "TimestampMixin",
    "ViewerPreferences",
]
