# ==============================================================================
# DATABASE ADAPTERS PACKAGE
# ==============================================================================

"""
Database Adapters
=================

Unified interface implementations for different databases:
- BaseDatabaseAdapter: Abstract interface and connection driver surface
- SQLAlchemyAdapter: Shared SQL engine lifecycle and CRUD
- SQLiteAdapter: SQLite using aiosqlite
- PostgreSQLAdapter: PostgreSQL using asyncpg
- MongoDBAdapter: MongoDB using Motor
"""

from pawsitiv.database.adapters.base_adapter import BaseDatabaseAdapter
from pawsitiv.database.adapters.sql_adapter import SQLAlchemyAdapter
from pawsitiv.database.adapters.postgresql_adapter import PostgreSQLAdapter
from pawsitiv.database.adapters.mongodb_adapter import MongoDBAdapter
from pawsitiv.database.adapters.sqlite_adapter import SQLiteAdapter

__all__ = [
    "BaseDatabaseAdapter",
    "SQLAlchemyAdapter",
    "PostgreSQLAdapter",
    "MongoDBAdapter",
    "SQLiteAdapter",
]
