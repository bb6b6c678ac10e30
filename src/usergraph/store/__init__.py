"""
User entity store
"""

from .errors import ConflictError, NotFoundError, UserGraphError, ValidationError
from .filters import QueryMode, StringFilter, UserUpdate, UserWhere
from .store import UserRecord, UserStore

__all__ = [
    "ConflictError",
    "NotFoundError",
    "QueryMode",
    "StringFilter",
    "UserGraphError",
    "UserRecord",
    "UserStore",
    "UserUpdate",
    "UserWhere",
    "ValidationError",
]
