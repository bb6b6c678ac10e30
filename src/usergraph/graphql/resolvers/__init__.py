"""
Resolver functions and the static table binding them to root fields
"""

from collections.abc import Callable
from typing import Any

from .user import (
    big_red_button,
    create_one_user,
    delete_many_user,
    delete_one_user,
    resolve_all_users,
    resolve_user,
    resolve_users,
    update_many_user,
    update_one_user,
)

# GraphQL root field name -> resolver
QUERY_RESOLVERS: dict[str, Callable[..., Any]] = {
    "allUsers": resolve_all_users,
    "user": resolve_user,
    "users": resolve_users,
}

MUTATION_RESOLVERS: dict[str, Callable[..., Any]] = {
    "bigRedButton": big_red_button,
    "createOneUser": create_one_user,
    "deleteOneUser": delete_one_user,
    "deleteManyUser": delete_many_user,
    "updateOneUser": update_one_user,
    "updateManyUser": update_many_user,
}

__all__ = ["MUTATION_RESOLVERS", "QUERY_RESOLVERS"]
