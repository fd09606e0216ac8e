from .preferences_repository import PreferencesRepository

__all__ = ["PreferencesRepository"]
