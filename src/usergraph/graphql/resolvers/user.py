from __future__ import annotations

from typing import Any

import strawberry

from ...logging import get_logger
from ...store import NotFoundError, UserStore
from ..types.inputs import (
    UserCreateInput,
    UserUpdateInput,
    UserUpdateManyMutationInput,
    UserWhereInput,
    UserWhereUniqueInput,
)
from ..types.user import BatchPayload, User

logger = get_logger(__name__)

BIG_RED_BUTTON_MESSAGE = "{count} user(s) destroyed. Thanos will be proud."


def get_store(info: strawberry.Info) -> UserStore:
    """Get the user store injected into the request context."""
    return info.context["store"]


def _as_dict(value: Any) -> dict[str, Any] | None:
    """Convert a Strawberry input into the plain dict the store validates."""
    return None if value is None else strawberry.asdict(value)


# Query resolvers
async def resolve_all_users(info: strawberry.Info) -> list[User]:
    """Get all users."""
    records = await get_store(info).find_many({})
    return [User.from_record(record) for record in records]


async def resolve_user(info: strawberry.Info, where: UserWhereUniqueInput) -> User | None:
    """Get a single user by id, or null when it does not exist."""
    try:
        record = await get_store(info).find_unique(where.id)
    except NotFoundError:
        return None
    return User.from_record(record)


async def resolve_users(
    info: strawberry.Info,
    skip: int | None = None,
    after: UserWhereUniqueInput | None = None,
    before: UserWhereUniqueInput | None = None,
    first: int | None = None,
    last: int | None = None,
) -> list[User]:
    """Page through users ordered by id."""
    records = await get_store(info).find_page(
        first=first,
        last=last,
        before=before.id if before else None,
        after=after.id if after else None,
        skip=skip,
    )
    return [User.from_record(record) for record in records]


# Mutation resolvers
async def big_red_button(info: strawberry.Info) -> str:
    """Delete every user."""
    count = await get_store(info).delete_many({})
    logger.warning("Big red button pressed", count=count)
    return BIG_RED_BUTTON_MESSAGE.format(count=count)


async def create_one_user(info: strawberry.Info, data: UserCreateInput) -> User:
    """Create a user; a duplicate id is reported as an error."""
    record = await get_store(info).create(name=data.name, id=data.id)
    return User.from_record(record)


async def delete_one_user(info: strawberry.Info, where: UserWhereUniqueInput) -> User | None:
    """Delete a user by id, or return null when it does not exist."""
    try:
        record = await get_store(info).delete_one(where.id)
    except NotFoundError:
        logger.info("Delete of missing user ignored", user_id=where.id)
        return None
    return User.from_record(record)


async def delete_many_user(
    info: strawberry.Info, where: UserWhereInput | None = None
) -> BatchPayload:
    """Delete all users matching the filter."""
    count = await get_store(info).delete_many(_as_dict(where))
    return BatchPayload(count=count)


async def update_one_user(
    info: strawberry.Info, data: UserUpdateInput, where: UserWhereUniqueInput
) -> User | None:
    """Update a user by id, or return null when it does not exist."""
    try:
        record = await get_store(info).update_one(where.id, _as_dict(data))
    except NotFoundError:
        logger.info("Update of missing user ignored", user_id=where.id)
        return None
    return User.from_record(record)


async def update_many_user(
    info: strawberry.Info,
    data: UserUpdateManyMutationInput,
    where: UserWhereInput | None = None,
) -> BatchPayload:
    """Update all users matching the filter."""
    count = await get_store(info).update_many(_as_dict(where), _as_dict(data))
    return BatchPayload(count=count)
