"""
Database module for usergraph
"""

from .connection import create_engine, create_tables, session_scope

__all__ = ["create_engine", "create_tables", "session_scope"]
