"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from prp.config import Settings, StoreSettings
from prp.domain.repository import (
    AccountRepository,
    EndorsementRequestRepository,
    InviteCodeRepository,
    PressReleaseRepository,
)
from prp.persistence.database import create_engine, create_session_factory
from prp.persistence.repository import (
    PostgresAccountRepository,
    PostgresEndorsementRequestRepository,
    PostgresInviteCodeRepository,
    PostgresPressReleaseRepository,
)
from prp.util.di.base import ProviderBase
from prp.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is committed at the end of the request if no exception
        occurred, or rolled back if one was raised. Every write in a request
        lands or none does.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.debug("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_account_repository(
        self, session: AsyncSession, store_settings: StoreSettings
    ) -> AccountRepository:
        """Provide Account repository."""
        return PostgresAccountRepository(session, store_settings)

    @provide(scope=Scope.REQUEST)
    def get_invite_code_repository(
        self, session: AsyncSession, store_settings: StoreSettings
    ) -> InviteCodeRepository:
        """Provide InviteCode repository."""
        return PostgresInviteCodeRepository(session, store_settings)

    @provide(scope=Scope.REQUEST)
    def get_endorsement_request_repository(
        self, session: AsyncSession, store_settings: StoreSettings
    ) -> EndorsementRequestRepository:
        """Provide EndorsementRequest repository."""
        return PostgresEndorsementRequestRepository(session, store_settings)

    @provide(scope=Scope.REQUEST)
    def get_press_release_repository(
        self, session: AsyncSession, store_settings: StoreSettings
    ) -> PressReleaseRepository:
        """Provide PressRelease repository."""
        return PostgresPressReleaseRepository(session, store_settings)
