"""Error taxonomy shared by the store and the GraphQL layer."""

from typing import Any


class UserGraphError(Exception):
    """Base class for errors scoped to a single request."""

    code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def extensions(self) -> dict[str, Any]:
        """GraphQL error extensions (picked up by graphql-core when formatting)."""
        return {"code": self.code}


class NotFoundError(UserGraphError):
    """Referenced user does not exist."""

    code = "NOT_FOUND"


class ConflictError(UserGraphError):
    """A user with the requested id already exists."""

    code = "CONFLICT"


class ValidationError(UserGraphError):
    """Malformed filter, update data or pagination arguments."""

    code = "BAD_USER_INPUT"
