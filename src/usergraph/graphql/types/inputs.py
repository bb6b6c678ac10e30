"""
GraphQL input types for user filters, creation and updates
"""

import strawberry

from ...store import QueryMode as QueryModeEnum

QueryMode = strawberry.enum(QueryModeEnum, name="QueryMode")


@strawberry.input
class UserWhereUniqueInput:
    """Selects a single user by id."""

    id: str


@strawberry.input
class NestedStringFilter:
    equals: str | None = None
    in_: list[str] | None = strawberry.field(default=None, name="in")
    not_in: list[str] | None = None
    lt: str | None = None
    lte: str | None = None
    gt: str | None = None
    gte: str | None = None
    contains: str | None = None
    starts_with: str | None = None
    ends_with: str | None = None
    not_: "NestedStringFilter | None" = strawberry.field(default=None, name="not")


@strawberry.input
class StringFilter:
    """Predicates over a string field; all given predicates must hold."""

    equals: str | None = None
    in_: list[str] | None = strawberry.field(default=None, name="in")
    not_in: list[str] | None = None
    lt: str | None = None
    lte: str | None = None
    gt: str | None = None
    gte: str | None = None
    contains: str | None = None
    starts_with: str | None = None
    ends_with: str | None = None
    mode: QueryMode | None = None
    not_: NestedStringFilter | None = strawberry.field(default=None, name="not")


@strawberry.input
class UserWhereInput:
    """Composable user filter."""

    AND: "list[UserWhereInput] | None" = None
    OR: "list[UserWhereInput] | None" = None
    NOT: "list[UserWhereInput] | None" = None
    id: StringFilter | None = None
    name: StringFilter | None = None


@strawberry.input
class UserCreateInput:
    name: str
    id: str | None = None


@strawberry.input
class StringFieldUpdateOperationsInput:
    set_: str = strawberry.field(name="set")


@strawberry.input
class UserUpdateInput:
    name: StringFieldUpdateOperationsInput | None = None


@strawberry.input
class UserUpdateManyMutationInput:
    name: StringFieldUpdateOperationsInput | None = None
