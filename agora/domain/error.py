"""Domain layer errors.

Every failure the core can predict is one of the classes below. Anything else
raised from a service (database outages, driver errors) is an internal error
and must not be caught as a domain error.
"""

from agora.domain.value import ConflictReason


class DomainError(Exception):
    """Base domain error."""

    kind: str = "domain_error"


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    kind = "not_found"

    def __init__(self, resource: str, identifier: object):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class AuthenticationRequiredError(DomainError):
    """Raised when an operation needs an authenticated actor."""

    kind = "unauthorized"

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Authentication required to {action}")


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to modify content they don't own."""

    kind = "forbidden"

    def __init__(self, resource: str, resource_id: object, user_id: object):
        self.resource = resource
        self.resource_id = resource_id
        self.user_id = user_id
        super().__init__(
            f"User {user_id} is not authorized to modify {resource} {resource_id}"
        )


class ConflictError(DomainError):
    """Raised when a request conflicts with the current ledger or poll state."""

    kind = "conflict"

    def __init__(self, reason: ConflictReason, message: str):
        self.reason = reason
        super().__init__(message)


class InvalidInputError(DomainError):
    """Raised when caller-supplied values violate a domain rule."""

    kind = "invalid_input"
