"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from agora.config import Settings
from agora.domain.repository import (
    CommentRepository,
    PollRepository,
    PollVoteRepository,
    PostRepository,
    TransactionManager,
    VoteRepository,
)
from agora.persistence.database import create_engine, create_session_factory
from agora.persistence.repository import (
    PostgresCommentRepository,
    PostgresPollRepository,
    PostgresPollVoteRepository,
    PostgresPostRepository,
    PostgresTransactionManager,
    PostgresVoteRepository,
)
from agora.util.di.base import ProviderBase
from agora.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base.

    Subclasses provide the repositories and the transaction manager; the
    test suite swaps in an in-memory subclass.
    """

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """PostgreSQL persistence: one engine per app, one session per request."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide the pooled engine; disposed when the container closes."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()
        logfire.info("Database engine disposed")

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide the request's session.

        Everything a request writes lands in one transaction: committed when
        the request finishes, rolled back when any exception (domain errors
        included) escapes the handler.
        """
        async with session_factory() as session:
            try:
                yield session
            except Exception as e:
                logfire.warn(
                    "Request transaction rolled back",
                    error_type=type(e).__name__,
                    error=str(e),
                )
                await session.rollback()
                raise
            else:
                await session.commit()
                logfire.debug("Request transaction committed")

    @provide(scope=Scope.REQUEST)
    def get_transaction_manager(self, session: AsyncSession) -> TransactionManager:
        return PostgresTransactionManager(session)

    @provide(scope=Scope.REQUEST)
    def get_post_repository(self, session: AsyncSession) -> PostRepository:
        return PostgresPostRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, session: AsyncSession) -> CommentRepository:
        return PostgresCommentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_vote_repository(self, session: AsyncSession) -> VoteRepository:
        """Ledger for both post and comment votes."""
        return PostgresVoteRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_poll_repository(self, session: AsyncSession) -> PollRepository:
        """Polls together with their options."""
        return PostgresPollRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_poll_vote_repository(self, session: AsyncSession) -> PollVoteRepository:
        return PostgresPollVoteRepository(session)
