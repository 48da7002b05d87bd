"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from outpost.config import DatabaseSettings, Settings
from outpost.domain.repository import UserRepository
from outpost.persistence.database import create_engine, create_session_factory
from outpost.persistence.repository import SqlUserRepository
from outpost.util.di.base import ProviderBase
from outpost.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using the SQL user repository."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed when the container closes."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()
        logfire.info("Database engine disposed")

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.APP)
    async def get_user_repository(
        self,
        engine: AsyncEngine,
        session_factory: async_sessionmaker[AsyncSession],
        database_settings: DatabaseSettings,
    ) -> UserRepository:
        """Provide the shared User repository."""
        repository = SqlUserRepository(engine, session_factory)
        if database_settings.initialize_schema:
            await repository.initialize()
        return repository
