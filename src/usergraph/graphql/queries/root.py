"""
Root GraphQL query definitions
"""

import strawberry

from ..resolvers import QUERY_RESOLVERS
from ..types.user import User


@strawberry.type
class Query:
    """Root GraphQL query type."""

    all_users: list[User] = strawberry.field(
        name="allUsers",
        resolver=QUERY_RESOLVERS["allUsers"],
        description="Get all users.",
    )
    user: User | None = strawberry.field(
        name="user",
        resolver=QUERY_RESOLVERS["user"],
        description="Get a user by id.",
    )
    users: list[User] = strawberry.field(
        name="users",
        resolver=QUERY_RESOLVERS["users"],
        description="Page through users ordered by id.",
    )
