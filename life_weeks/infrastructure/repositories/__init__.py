from .sqlalchemy_preferences_repository import SqlAlchemyPreferencesRepository

__all__ = ["SqlAlchemyPreferencesRepository"]
