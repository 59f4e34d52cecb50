"""Actor resolution for API routes.

Tokens are read from the ``auth_token`` cookie. A missing or invalid token
means the request is anonymous.
"""

from agora.domain.error import AuthenticationRequiredError
from agora.domain.service import JWTService
from agora.util.jwt import TokenPayload


def current_actor(jwt_service: JWTService, auth_token: str | None) -> TokenPayload | None:
    """Verified token payload, or None for anonymous requests."""
    return jwt_service.get_actor_from_token(auth_token)


def require_actor(
    jwt_service: JWTService, auth_token: str | None, action: str
) -> TokenPayload:
    """Verified token payload.

    Raises:
        AuthenticationRequiredError: If the request is anonymous
    """
    actor = jwt_service.get_actor_from_token(auth_token)
    if actor is None:
        raise AuthenticationRequiredError(action)
    return actor


def actor_id(actor: TokenPayload | None) -> int | None:
    return actor.user_id if actor is not None else None
