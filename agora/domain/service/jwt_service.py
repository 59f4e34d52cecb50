"""JWT token domain service."""

import logfire

from agora.config import AuthSettings
from agora.util.jwt import JWTError, TokenPayload, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for verifying JWT tokens.

    Tokens are issued by the identity provider; this service only checks
    them and extracts the actor.
    """

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise
            logfire.debug("JWT token verified", user_id=payload.user_id)
            return payload

    def get_actor_from_token(self, token: str | None) -> TokenPayload | None:
        """Extract the actor from a JWT token without raising.

        API routes use this to optionally authenticate users: a missing,
        invalid or expired token means an anonymous request.

        Args:
            token: JWT token string (optional)

        Returns:
            Token payload if the token is valid, None otherwise
        """
        if not token:
            return None

        try:
            return self.verify_token(token)
        except JWTError:
            return None
