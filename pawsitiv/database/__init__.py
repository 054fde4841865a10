# ==============================================================================
# DATABASE PACKAGE INITIALIZATION
# ==============================================================================
# Database abstraction layer with a supervised connection
# ==============================================================================

"""
Database Module
===============

Supports SQLite (development/testing), PostgreSQL and MongoDB.

Key Components:
- Adapters: Database-specific implementations
- Connection: Supervisor, retry scheduler and event broadcaster
- Factory: Adapter creation and connection lifecycle
"""

from pawsitiv.database.factory import DatabaseFactory
from pawsitiv.database.adapters.base_adapter import BaseDatabaseAdapter

__all__ = [
    "DatabaseFactory",
    "BaseDatabaseAdapter",
]
