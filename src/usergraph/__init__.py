"""
usergraph
CRUD GraphQL service around a single User entity
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
