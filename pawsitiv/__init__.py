# ==============================================================================
# PAWSITIV PACKAGE INITIALIZATION
# ==============================================================================
# Street-cat community backend with FastAPI
# Supports: SQLite, PostgreSQL, MongoDB
# ==============================================================================

"""
Pawsitiv Backend
================

REST backend for sharing and managing street-cat profiles.

Features:
---------
- Cats, users, notifications, polls
- Session cookie authentication
- Image upload with compression
- Supervised database connection with bounded retries
  and self-healing reconnects

Usage:
------
    uvicorn pawsitiv.main:app --port 3669
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
