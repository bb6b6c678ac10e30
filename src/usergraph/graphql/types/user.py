"""
User GraphQL type definitions
"""

import strawberry

from ...store import UserRecord


@strawberry.type
class User:
    """User type for GraphQL API."""

    id: strawberry.ID
    name: str

    @classmethod
    def from_record(cls, record: UserRecord) -> "User":
        return cls(id=strawberry.ID(record.id), name=record.name)


@strawberry.type
class BatchPayload:
    """Number of rows affected by a bulk mutation."""

    count: int
