"""Application layer DI providers."""

from dishka import Scope, provide

from agora.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentsUseCase,
    GetCommentUseCase,
    ReplyToCommentUseCase,
    UpdateCommentUseCase,
)
from agora.application.usecase.poll import (
    CreatePollUseCase,
    DeletePollOptionUseCase,
    DeletePollUseCase,
    GetPollOptionsUseCase,
    GetPollResultsUseCase,
    GetPollUseCase,
    UpdatePollOptionUseCase,
    UpdatePollUseCase,
    VotePollUseCase,
)
from agora.application.usecase.post import (
    CreatePostUseCase,
    DeletePostUseCase,
    GetPostUseCase,
    ListPostsUseCase,
    SearchPostsUseCase,
    UpdatePostUseCase,
)
from agora.application.usecase.user import ListUserCommentsUseCase, ListUserPostsUseCase
from agora.application.usecase.vote import CastVoteUseCase, RemoveVoteUseCase
from agora.config import PaginationSettings
from agora.domain.service import (
    CommentService,
    CommentTreeService,
    PollService,
    PostService,
    VoteService,
)
from agora.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Post use cases
    @provide(scope=Scope.REQUEST)
    def get_create_post_use_case(self, post_service: PostService) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_get_post_use_case(
        self,
        post_service: PostService,
        comment_service: CommentService,
        vote_service: VoteService,
    ) -> GetPostUseCase:
        """Provide get post use case."""
        return GetPostUseCase(
            post_service=post_service,
            comment_service=comment_service,
            vote_service=vote_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_posts_use_case(
        self,
        post_service: PostService,
        comment_service: CommentService,
        vote_service: VoteService,
        pagination_settings: PaginationSettings,
    ) -> ListPostsUseCase:
        """Provide list posts use case."""
        return ListPostsUseCase(
            post_service=post_service,
            comment_service=comment_service,
            vote_service=vote_service,
            pagination_settings=pagination_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_search_posts_use_case(
        self,
        post_service: PostService,
        comment_service: CommentService,
        vote_service: VoteService,
        pagination_settings: PaginationSettings,
    ) -> SearchPostsUseCase:
        """Provide search posts use case."""
        return SearchPostsUseCase(
            post_service=post_service,
            comment_service=comment_service,
            vote_service=vote_service,
            pagination_settings=pagination_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_update_post_use_case(
        self,
        post_service: PostService,
        comment_service: CommentService,
        vote_service: VoteService,
    ) -> UpdatePostUseCase:
        """Provide update post use case."""
        return UpdatePostUseCase(
            post_service=post_service,
            comment_service=comment_service,
            vote_service=vote_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_post_use_case(self, post_service: PostService) -> DeletePostUseCase:
        """Provide delete post use case."""
        return DeletePostUseCase(post_service=post_service)

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, comment_service: CommentService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_reply_to_comment_use_case(
        self, comment_service: CommentService
    ) -> ReplyToCommentUseCase:
        """Provide reply to comment use case."""
        return ReplyToCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_get_comments_use_case(
        self, comment_tree_service: CommentTreeService
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(comment_tree_service=comment_tree_service)

    @provide(scope=Scope.REQUEST)
    def get_get_comment_use_case(
        self, comment_tree_service: CommentTreeService
    ) -> GetCommentUseCase:
        """Provide get comment use case."""
        return GetCommentUseCase(comment_tree_service=comment_tree_service)

    @provide(scope=Scope.REQUEST)
    def get_update_comment_use_case(
        self, comment_service: CommentService
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(self, vote_service: VoteService) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_remove_vote_use_case(self, vote_service: VoteService) -> RemoveVoteUseCase:
        """Provide remove vote use case."""
        return RemoveVoteUseCase(vote_service=vote_service)

    # Poll use cases
    @provide(scope=Scope.REQUEST)
    def get_create_poll_use_case(self, poll_service: PollService) -> CreatePollUseCase:
        """Provide create poll use case."""
        return CreatePollUseCase(poll_service=poll_service)

    @provide(scope=Scope.REQUEST)
    def get_get_poll_use_case(self, poll_service: PollService) -> GetPollUseCase:
        """Provide get poll use case."""
        return GetPollUseCase(poll_service=poll_service)

    @provide(scope=Scope.REQUEST)
    def get_vote_poll_use_case(self, poll_service: PollService) -> VotePollUseCase:
        """Provide poll ballot use case."""
        return VotePollUseCase(poll_service=poll_service)

    @provide(scope=Scope.REQUEST)
    def get_get_poll_options_use_case(
        self, poll_service: PollService
    ) -> GetPollOptionsUseCase:
        """Provide poll options use case."""
        return GetPollOptionsUseCase(poll_service=poll_service)

    @provide(scope=Scope.REQUEST)
    def get_get_poll_results_use_case(
        self, poll_service: PollService
    ) -> GetPollResultsUseCase:
        """Provide poll results use case."""
        return GetPollResultsUseCase(poll_service=poll_service)

    @provide(scope=Scope.REQUEST)
    def get_update_poll_use_case(self, poll_service: PollService) -> UpdatePollUseCase:
        """Provide update poll use case."""
        return UpdatePollUseCase(poll_service=poll_service)

    @provide(scope=Scope.REQUEST)
    def get_update_poll_option_use_case(
        self, poll_service: PollService
    ) -> UpdatePollOptionUseCase:
        """Provide update poll option use case."""
        return UpdatePollOptionUseCase(poll_service=poll_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_poll_option_use_case(
        self, poll_service: PollService
    ) -> DeletePollOptionUseCase:
        """Provide delete poll option use case."""
        return DeletePollOptionUseCase(poll_service=poll_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_poll_use_case(self, poll_service: PollService) -> DeletePollUseCase:
        """Provide delete poll use case."""
        return DeletePollUseCase(poll_service=poll_service)

    # User activity use cases
    @provide(scope=Scope.REQUEST)
    def get_list_user_posts_use_case(
        self,
        post_service: PostService,
        comment_service: CommentService,
        vote_service: VoteService,
        pagination_settings: PaginationSettings,
    ) -> ListUserPostsUseCase:
        """Provide user post history use case."""
        return ListUserPostsUseCase(
            post_service=post_service,
            comment_service=comment_service,
            vote_service=vote_service,
            pagination_settings=pagination_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_user_comments_use_case(
        self,
        comment_service: CommentService,
        pagination_settings: PaginationSettings,
    ) -> ListUserCommentsUseCase:
        """Provide user comment history use case."""
        return ListUserCommentsUseCase(
            comment_service=comment_service,
            pagination_settings=pagination_settings,
        )
