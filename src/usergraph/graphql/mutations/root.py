"""
Root GraphQL mutation definitions
"""

import strawberry

from ..resolvers import MUTATION_RESOLVERS
from ..types.user import BatchPayload, User


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    big_red_button: str = strawberry.mutation(
        name="bigRedButton",
        resolver=MUTATION_RESOLVERS["bigRedButton"],
        description="Delete every user.",
    )

    # User CRUD mutations
    create_one_user: User = strawberry.mutation(
        name="createOneUser", resolver=MUTATION_RESOLVERS["createOneUser"]
    )
    delete_one_user: User | None = strawberry.mutation(
        name="deleteOneUser", resolver=MUTATION_RESOLVERS["deleteOneUser"]
    )
    delete_many_user: BatchPayload = strawberry.mutation(
        name="deleteManyUser", resolver=MUTATION_RESOLVERS["deleteManyUser"]
    )
    update_one_user: User | None = strawberry.mutation(
        name="updateOneUser", resolver=MUTATION_RESOLVERS["updateOneUser"]
    )
    update_many_user: BatchPayload = strawberry.mutation(
        name="updateManyUser", resolver=MUTATION_RESOLVERS["updateManyUser"]
    )
