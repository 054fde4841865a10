# ==============================================================================
# DOMAIN MODELS PACKAGE INITIALIZATION
# ==============================================================================

"""
Domain Models
=============

SQLAlchemy ORM models for the SQL backends (MongoDB stores the same
fields as documents):
- User: Community members and their cat subscriptions
- Cat / CatImage: Street-cat profiles and uploaded images
- Notification: Per-user notifications about cats
- Poll / Answer: Community polls
"""

from pawsitiv.domain_models.base import SQLBase, TimestampMixin
from pawsitiv.domain_models.user import User
from pawsitiv.domain_models.cat import Cat, CatImage
from pawsitiv.domain_models.notification import Notification
from pawsitiv.domain_models.poll import Poll, Answer

__all__ = [
    "SQLBase",
    "TimestampMixin",
    "User",
    "Cat",
    "CatImage",
    "Notification",
    "Poll",
    "Answer",
]
