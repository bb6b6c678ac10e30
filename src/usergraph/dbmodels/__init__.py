"""
Database models for usergraph (authoritative ORM definitions).

Constraint names follow a fixed naming convention so the schema created by
``create_all`` is identical across SQLite and PostgreSQL.
"""

from sqlalchemy import MetaData, PrimaryKeyConstraint, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all database models with type checking support."""

    metadata = MetaData(naming_convention=naming_convention)


class Users(Base):
    __tablename__ = "User"
    __table_args__ = (PrimaryKeyConstraint("id", name="User_pkey"),)

    id: Mapped[str] = mapped_column(String(255))
    name: Mapped[str] = mapped_column(String, nullable=False)

    def __repr__(self) -> str:
        return f"Users(id={self.id!r}, name={self.name!r})"


__all__ = ["Base", "Users"]
