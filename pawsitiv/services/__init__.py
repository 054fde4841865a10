# ==============================================================================
# SERVICES PACKAGE INITIALIZATION
# ==============================================================================

"""
Business Logic Services
=======================

Service layer between the HTTP routes and the database adapter:
- UserService: accounts, login, cat subscriptions
- CatService: cat profiles, filtering, image uploads
- NotificationService: per-user notifications
- PollService: polls and answers
"""

from pawsitiv.services.base_service import BaseService
from pawsitiv.services.user_service import UserService
from pawsitiv.services.cat_service import CatService
from pawsitiv.services.notification_service import NotificationService
from pawsitiv.services.poll_service import PollService

__all__ = [
    "BaseService",
    "UserService",
    "CatService",
    "NotificationService",
    "PollService",
]
