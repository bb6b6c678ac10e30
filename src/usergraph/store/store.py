"""
User entity store.

``UserStore`` owns the canonical set of users. Each public call runs in its
own transaction while holding the store lock, so a call is applied as one
consistent change relative to every other call on the same store.
"""

import asyncio
import uuid
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict
from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine

from ..database.connection import create_engine, create_session_factory, create_tables, session_scope
from ..dbmodels import Users
from ..logging import get_logger
from .errors import ConflictError, NotFoundError, ValidationError
from .filters import UserUpdate, UserWhere, parse_update, parse_where, where_condition

logger = get_logger(__name__)

WhereArg = UserWhere | Mapping[str, Any] | None
UpdateArg = UserUpdate | Mapping[str, Any] | None


class UserRecord(BaseModel):
    """Detached snapshot of a stored user."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    name: str


def generate_user_id() -> str:
    return str(uuid.uuid4())


class UserStore:
    """CRUD operations over the ``User`` table."""

    def __init__(self, engine: AsyncEngine, id_factory: Callable[[], str] = generate_user_id):
        self.engine = engine
        self._session_factory = create_session_factory(engine)
        self._id_factory = id_factory
        self._lock = asyncio.Lock()

    @classmethod
    def from_url(cls, database_url: str, echo: bool = False) -> "UserStore":
        return cls(create_engine(database_url, echo=echo))

    async def init(self) -> None:
        """Create the backing tables if they are missing."""
        await create_tables(self.engine)

    async def close(self) -> None:
        await self.engine.dispose()

    # Reads

    async def find_many(self, where: WhereArg = None) -> list[UserRecord]:
        """Return every user matching ``where``, ordered by id."""
        condition = where_condition(parse_where(where))
        async with self._lock, session_scope(self._session_factory) as session:
            result = await session.execute(select(Users).where(condition).order_by(Users.id))
            return [UserRecord.model_validate(user) for user in result.scalars()]

    async def find_unique(self, id: str) -> UserRecord:
        async with self._lock, session_scope(self._session_factory) as session:
            user = await session.get(Users, id)
            if user is None:
                raise NotFoundError(f"No user found with id '{id}'")
            return UserRecord.model_validate(user)

    async def count(self, where: WhereArg = None) -> int:
        condition = where_condition(parse_where(where))
        async with self._lock, session_scope(self._session_factory) as session:
            result = await session.execute(select(func.count()).select_from(Users).where(condition))
            return result.scalar_one()

    async def find_page(
        self,
        *,
        first: int | None = None,
        last: int | None = None,
        before: str | None = None,
        after: str | None = None,
        skip: int | None = None,
    ) -> list[UserRecord]:
        """
        Cursor pagination over users ordered by id.

        ``after`` keeps ids strictly greater than the cursor and ``before``
        keeps ids strictly smaller. ``first``/``last`` bound the page from the
        start/end of that window; with both, ``last`` is taken from the
        ``first`` slice. ``skip`` drops rows from the side being paged from.
        """
        for arg_name, value in (("first", first), ("last", last), ("skip", skip)):
            if value is not None and value < 0:
                raise ValidationError(f"'{arg_name}' must be a non-negative integer, got {value}")

        stmt = select(Users)
        if after is not None:
            stmt = stmt.where(Users.id > after)
        if before is not None:
            stmt = stmt.where(Users.id < before)

        from_end = last is not None and first is None
        stmt = stmt.order_by(Users.id.desc() if from_end else Users.id.asc())
        if skip:
            stmt = stmt.offset(skip)
        if from_end:
            stmt = stmt.limit(last)
        elif first is not None:
            stmt = stmt.limit(first)

        async with self._lock, session_scope(self._session_factory) as session:
            result = await session.execute(stmt)
            records = [UserRecord.model_validate(user) for user in result.scalars()]

        if from_end:
            records.reverse()
        elif last is not None:
            records = records[len(records) - last :] if last else []
        return records

    # Writes

    async def create(self, name: str, id: str | None = None) -> UserRecord:
        """Insert a user, generating an id when none is given."""
        if not isinstance(name, str):
            raise ValidationError("'name' must be a string")

        user_id = id if id is not None else self._id_factory()
        async with self._lock, session_scope(self._session_factory) as session:
            user = Users(id=user_id, name=name)
            session.add(user)
            try:
                await session.flush()
            except IntegrityError as e:
                raise ConflictError(f"A user with id '{user_id}' already exists") from e
            record = UserRecord.model_validate(user)

        logger.info("User created", user_id=record.id)
        return record

    async def update_one(self, id: str, data: UpdateArg) -> UserRecord:
        values = parse_update(data).column_values()
        async with self._lock, session_scope(self._session_factory) as session:
            user = await session.get(Users, id)
            if user is None:
                raise NotFoundError(f"No user found with id '{id}'")
            for key, value in values.items():
                setattr(user, key, value)
            await session.flush()
            record = UserRecord.model_validate(user)

        logger.info("User updated", user_id=id, fields=sorted(values))
        return record

    async def update_many(self, where: WhereArg, data: UpdateArg) -> int:
        """Apply ``data`` to every matching user; returns the number matched."""
        condition = where_condition(parse_where(where))
        values = parse_update(data).column_values()

        async with self._lock, session_scope(self._session_factory) as session:
            if values:
                stmt = (
                    update(Users)
                    .where(condition)
                    .values(**values)
                    .execution_options(synchronize_session=False)
                )
                count = (await session.execute(stmt)).rowcount
            else:
                stmt = select(func.count()).select_from(Users).where(condition)
                count = (await session.execute(stmt)).scalar_one()

        logger.info("Users updated", count=count, fields=sorted(values))
        return count

    async def delete_one(self, id: str) -> UserRecord:
        async with self._lock, session_scope(self._session_factory) as session:
            user = await session.get(Users, id)
            if user is None:
                raise NotFoundError(f"No user found with id '{id}'")
            record = UserRecord.model_validate(user)
            await session.delete(user)

        logger.info("User deleted", user_id=id)
        return record

    async def delete_many(self, where: WhereArg = None) -> int:
        """Delete every matching user (all users when ``where`` is empty)."""
        condition = where_condition(parse_where(where))
        async with self._lock, session_scope(self._session_factory) as session:
            stmt = delete(Users).where(condition).execution_options(synchronize_session=False)
            count = (await session.execute(stmt)).rowcount

        logger.info("Users deleted", count=count)
        return count
