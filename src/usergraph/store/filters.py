"""
User filter and update models, and their translation to SQL expressions.

Filters arrive either as these pydantic models or as plain dicts (GraphQL
inputs are converted with ``strawberry.asdict``). Keys may be camelCase
(``startsWith``) or snake_case (``starts_with``).
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from sqlalchemy import ColumnElement, and_, false, func, not_, or_, true

from ..dbmodels import Users
from .errors import ValidationError


class QueryMode(str, Enum):
    """Case sensitivity of string predicates."""

    default = "default"
    insensitive = "insensitive"


class StringFilter(BaseModel):
    """Predicates over one string column, ANDed together."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid", frozen=True
    )

    equals: str | None = None
    in_: list[str] | None = Field(default=None, alias="in")
    not_in: list[str] | None = None
    lt: str | None = None
    lte: str | None = None
    gt: str | None = None
    gte: str | None = None
    contains: str | None = None
    starts_with: str | None = None
    ends_with: str | None = None
    mode: QueryMode | None = None
    not_: StringFilter | str | None = Field(default=None, alias="not")


def _as_list(value: Any) -> Any:
    if value is None or isinstance(value, list):
        return value
    return [value]


class UserWhere(BaseModel):
    """Composable filter over users."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    AND: list[UserWhere] | None = None
    OR: list[UserWhere] | None = None
    NOT: list[UserWhere] | None = None
    id: StringFilter | str | None = None
    name: StringFilter | str | None = None

    @field_validator("AND", "OR", "NOT", mode="before")
    @classmethod
    def wrap_single(cls, value: Any) -> Any:
        """Accept a single nested filter where a list is expected."""
        return _as_list(value)


StringFilter.model_rebuild()
UserWhere.model_rebuild()


class FieldUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    set_: str = Field(alias="set")


class UserUpdate(BaseModel):
    """Field updates applied by update_one/update_many. ``id`` is immutable."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: FieldUpdate | str | None = None

    def column_values(self) -> dict[str, Any]:
        """Column values to write, skipping fields that are not being set."""
        values: dict[str, Any] = {}
        if self.name is not None:
            values["name"] = self.name.set_ if isinstance(self.name, FieldUpdate) else self.name
        return values


def _validate(model: type[BaseModel], value: Any, what: str) -> Any:
    if value is None:
        return None
    if isinstance(value, model):
        return value
    if not isinstance(value, Mapping):
        raise ValidationError(f"Invalid {what}: expected an object, got {type(value).__name__}")
    try:
        return model.model_validate(dict(value))
    except pydantic.ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc']) or what}: {err['msg']}"
            for err in e.errors()
        )
        raise ValidationError(f"Invalid {what}: {details}") from e


def parse_where(where: UserWhere | Mapping[str, Any] | None) -> UserWhere | None:
    """Validate a filter given as a model or a dict."""
    return _validate(UserWhere, where, "filter")


def parse_update(data: UserUpdate | Mapping[str, Any] | None) -> UserUpdate:
    """Validate update data given as a model or a dict."""
    return _validate(UserUpdate, data, "update data") or UserUpdate()


def string_condition(
    column: Any, flt: StringFilter | str, mode: QueryMode | None = None
) -> ColumnElement[bool]:
    """Build the SQL condition for one string column."""
    if isinstance(flt, str):
        flt = StringFilter(equals=flt, mode=mode)

    insensitive = (flt.mode or mode) is QueryMode.insensitive
    target = func.lower(column) if insensitive else column

    def norm(value: str) -> str:
        return value.lower() if insensitive else value

    clauses: list[ColumnElement[bool]] = []
    if flt.equals is not None:
        clauses.append(target == norm(flt.equals))
    if flt.in_ is not None:
        clauses.append(target.in_([norm(v) for v in flt.in_]))
    if flt.not_in is not None:
        clauses.append(target.not_in([norm(v) for v in flt.not_in]))
    if flt.lt is not None:
        clauses.append(target < norm(flt.lt))
    if flt.lte is not None:
        clauses.append(target <= norm(flt.lte))
    if flt.gt is not None:
        clauses.append(target > norm(flt.gt))
    if flt.gte is not None:
        clauses.append(target >= norm(flt.gte))
    if flt.contains is not None:
        clauses.append(target.contains(norm(flt.contains), autoescape=True))
    if flt.starts_with is not None:
        clauses.append(target.startswith(norm(flt.starts_with), autoescape=True))
    if flt.ends_with is not None:
        clauses.append(target.endswith(norm(flt.ends_with), autoescape=True))
    if flt.not_ is not None:
        # nested filters inherit the outer mode unless they set their own
        clauses.append(not_(string_condition(column, flt.not_, flt.mode or mode)))

    return and_(true(), *clauses)


def where_condition(where: UserWhere | None) -> ColumnElement[bool]:
    """Build the SQL condition for a user filter; ``None`` matches everything."""
    if where is None:
        return true()

    clauses: list[ColumnElement[bool]] = []
    if where.id is not None:
        clauses.append(string_condition(Users.id, where.id))
    if where.name is not None:
        clauses.append(string_condition(Users.name, where.name))
    if where.AND is not None:
        clauses.append(and_(true(), *(where_condition(w) for w in where.AND)))
    if where.OR is not None:
        clauses.append(or_(false(), *(where_condition(w) for w in where.OR)))
    if where.NOT is not None:
        clauses.append(and_(true(), *(not_(where_condition(w)) for w in where.NOT)))

    return and_(true(), *clauses)
