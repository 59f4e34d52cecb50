"""Domain layer DI providers."""

from dishka import Scope, provide

from agora.config import AuthSettings, CommentSettings, VotingSettings
from agora.domain.repository import (
    CommentRepository,
    PollRepository,
    PollVoteRepository,
    PostRepository,
    TransactionManager,
    VoteRepository,
)
from agora.domain.service import (
    CommentService,
    CommentTreeService,
    JWTService,
    PollService,
    PostService,
    VoteService,
)
from agora.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_post_service(
        self,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        vote_repository: VoteRepository,
        poll_repository: PollRepository,
        poll_vote_repository: PollVoteRepository,
        transaction_manager: TransactionManager,
    ) -> PostService:
        """Provide post domain service."""
        return PostService(
            post_repository=post_repository,
            comment_repository=comment_repository,
            vote_repository=vote_repository,
            poll_repository=poll_repository,
            poll_vote_repository=poll_vote_repository,
            transaction_manager=transaction_manager,
        )

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        vote_repository: VoteRepository,
        transaction_manager: TransactionManager,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            post_repository=post_repository,
            vote_repository=vote_repository,
            transaction_manager=transaction_manager,
        )

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        transaction_manager: TransactionManager,
        voting_settings: VotingSettings,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            post_repository=post_repository,
            comment_repository=comment_repository,
            transaction_manager=transaction_manager,
            voting_settings=voting_settings,
        )

    @provide
    def get_comment_tree_service(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        vote_service: VoteService,
        comment_settings: CommentSettings,
    ) -> CommentTreeService:
        """Provide comment tree domain service."""
        return CommentTreeService(
            comment_repository=comment_repository,
            post_repository=post_repository,
            vote_service=vote_service,
            comment_settings=comment_settings,
        )

    @provide
    def get_poll_service(
        self,
        poll_repository: PollRepository,
        poll_vote_repository: PollVoteRepository,
        post_repository: PostRepository,
        post_service: PostService,
        transaction_manager: TransactionManager,
    ) -> PollService:
        """Provide poll domain service."""
        return PollService(
            poll_repository=poll_repository,
            poll_vote_repository=poll_vote_repository,
            post_repository=post_repository,
            post_service=post_service,
            transaction_manager=transaction_manager,
        )
