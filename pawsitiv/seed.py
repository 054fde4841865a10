# ==============================================================================
# SEED DATA - Demo Users, Cats and Notifications
# ==============================================================================
# Usage: python -m pawsitiv.seed [--reset] [--admin USERNAME]
# ==============================================================================

from __future__ import annotations

import argparse
import asyncio
import logging
from datetime import timedelta
from typing import Any, Dict, List, Optional, Sequence

from pawsitiv.core.constants import DatabaseConstants, NotificationTypes
from pawsitiv.core.logging import setup_logging
from pawsitiv.core.settings import get_settings
from pawsitiv.database.adapters.base_adapter import BaseDatabaseAdapter
from pawsitiv.database.factory import DatabaseFactory
from pawsitiv.domain_models.base import utcnow
from pawsitiv.schemas.cat import CatCreate
from pawsitiv.schemas.notification import NotificationCreate
from pawsitiv.schemas.user import UserCreate
from pawsitiv.services.base_service import entity_value
from pawsitiv.services.cat_service import CatService
from pawsitiv.services.notification_service import NotificationService
from pawsitiv.services.user_service import UserService

logger = logging.getLogger(__name__)


# ==============================================================================
# DEMO DATA
# ==============================================================================

USERS: List[Dict[str, str]] = [
    {"name": "Cloud Strife", "username": "cloudstrife", "email": "cloud.strife@example.com"},
    {"name": "Tifa Lockhart", "username": "tifalockhart", "email": "tifa.lockhart@example.com"},
    {"name": "Malte Szemlics", "username": "malteszemlics", "email": "malte.szemlics@example.com"},
    {"name": "Leticia Halm", "username": "leticiahalm", "email": "leticia.halm@example.com"},
    {"name": "Sophia Kawgan Kagan", "username": "sophiakawgankagan", "email": "sophia.kawgankagan@example.com"},
    {"name": "Vu Duc Le", "username": "vuducle", "email": "vuducle@example.com"},
    {"name": "Winston Reichelt", "username": "winstonreichelt", "email": "winston.reichelt@example.com"},
    {"name": "Homam Mousa", "username": "homammousa", "email": "homam.mousa@example.com"},
    {"name": "Triesnha Ameilya", "username": "triesnhaameilya", "email": "triesnha.ameilya@example.com"},
    {"name": "Armin Dorri", "username": "armindorri", "email": "armin.dorri@example.com"},
]

CATS: List[Dict[str, Any]] = [
    {
        "name": "Princess Purrsalot",
        "location": "Midgar",
        "images": [
            "/upload/cats/princess_purrsalot_1.jpg",
            "/upload/cats/princess_purrsalot_2.jpg",
        ],
        "personality_tags": ["verspielt", "neugierig", "sanft"],
        "appearance": {
            "fur_color": "Weiß",
            "fur_pattern": "Einfarbig",
            "breed": "Perser",
            "hair_length": "lang",
            "chonkiness": "normal",
        },
    },
    {
        "name": "Commander Meowington",
        "location": "Kalm",
        "images": ["/upload/cats/commander_meowington_1.jpg"],
        "personality_tags": ["abenteuerlustig", "mutig"],
        "appearance": {
            "fur_color": "Schwarz",
            "fur_pattern": "Gestreift",
            "breed": "Maine Coon",
            "hair_length": "lang",
            "chonkiness": "mollig",
        },
    },
    {
        "name": "Sir Snugglepuss",
        "location": "Cosmo Canyon",
        "images": [
            "/upload/cats/sir_snugglepuss_1.jpg",
            "/upload/cats/sir_snugglepuss_2.jpg",
            "/upload/cats/sir_snugglepuss_3.jpg",
        ],
        "personality_tags": ["verschmust", "ruhig", "faul"],
        "appearance": {
            "fur_color": "Orange",
            "fur_pattern": "Getigert",
            "breed": "Europäisch Kurzhaar",
            "hair_length": "kurz",
            "chonkiness": "schlank",
        },
    },
    {
        "name": "Barrett",
        "location": "Sector 7 Slums",
        "images": ["/upload/cats/barrett_1.jpg", "/upload/cats/barrett_2.jpg"],
        "personality_tags": ["beschützend", "laut", "loyal"],
        "appearance": {
            "fur_color": "Schwarz",
            "fur_pattern": "Einfarbig",
            "breed": "Bombay",
            "hair_length": "kurz",
            "chonkiness": "mollig",
        },
    },
    {
        "name": "Yuna",
        "location": "Besaid Island",
        "images": ["/upload/cats/yuna_1.jpg"],
        "personality_tags": ["sanft", "spirituell", "mutig"],
        "appearance": {
            "fur_color": "Weiß",
            "fur_pattern": "Siam",
            "breed": "Siamese",
            "hair_length": "kurz",
            "chonkiness": "schlank",
        },
    },
    {
        "name": "Leon S. Kennedy",
        "location": "Raccoon City",
        "images": ["/upload/cats/leon_1.jpg", "/upload/cats/leon_2.jpg"],
        "personality_tags": ["beobachtend", "cool", "überlebenskünstler"],
        "appearance": {
            "fur_color": "Braun",
            "fur_pattern": "Getigert",
            "breed": "Abessinier",
            "hair_length": "kurz",
            "chonkiness": "normal",
        },
    },
]

# (username, cat name, type, age, seen)
NOTIFICATIONS = [
    ("cloudstrife", "Barrett", NotificationTypes.NEW_CAT, timedelta(days=1), False),
    ("tifalockhart", "Yuna", NotificationTypes.CAT_UPDATE, timedelta(hours=1), True),
    ("malteszemlics", "Leon S. Kennedy", NotificationTypes.MATCH, timedelta(0), False),
]

SEEDED_COLLECTIONS = (
    DatabaseConstants.NOTIFICATIONS_COLLECTION,
    DatabaseConstants.CAT_IMAGES_COLLECTION,
    DatabaseConstants.ANSWERS_COLLECTION,
    DatabaseConstants.POLLS_COLLECTION,
    DatabaseConstants.CATS_COLLECTION,
    DatabaseConstants.USERS_COLLECTION,
)


# ==============================================================================
# SEEDING
# ==============================================================================

async def clear_database(adapter: BaseDatabaseAdapter) -> None:
    """Delete every record, children before parents."""
    for collection in SEEDED_COLLECTIONS:
        removed = 0
        while True:
            batch = await adapter.get_all(collection, limit=DatabaseConstants.MAX_BATCH_SIZE)
            if not batch:
                break
            for record in batch:
                await adapter.delete(collection, entity_value(record, "id"))
                removed += 1
        logger.info("Cleared %d records from %s", removed, collection)


async def seed_database(
    adapter: BaseDatabaseAdapter,
    reset: bool = False,
    admin_username: Optional[str] = None,
) -> Dict[str, int]:
    """
    Insert the demo data set. Every demo password equals the username.

    Without ``reset`` a database that already has users is left alone.

    Returns:
        Number of created records per collection
    """
    if reset:
        await clear_database(adapter)
    elif await adapter.count(DatabaseConstants.USERS_COLLECTION) > 0:
        logger.info("Database already contains users, skipping seed")
        return {}

    users = UserService(adapter)
    cats = CatService(adapter)
    notifications = NotificationService(adapter)

    user_ids: Dict[str, str] = {}
    for data in USERS:
        user = await users.create(
            UserCreate(
                **data,
                password=data["username"],
                profile_picture=f"/upload/profile/{data['username']}.jpg",
                is_admin=data["username"] == admin_username,
            )
        )
        user_ids[user.username] = user.id
    logger.info("Created %d users", len(user_ids))

    cat_ids: Dict[str, str] = {}
    for data in CATS:
        cat = await cats.create(CatCreate.model_validate(data))
        cat_ids[cat.name] = cat.id
    logger.info("Created %d cats", len(cat_ids))

    now = utcnow()
    for username, cat_name, kind, age, seen in NOTIFICATIONS:
        await notifications.create(
            NotificationCreate(
                user_id=user_ids[username],
                cat_id=cat_ids[cat_name],
                type=kind,
                timestamp=now - age,
                seen=seen,
            )
        )
    logger.info("Created %d notifications", len(NOTIFICATIONS))

    return {
        DatabaseConstants.USERS_COLLECTION: len(user_ids),
        DatabaseConstants.CATS_COLLECTION: len(cat_ids),
        DatabaseConstants.NOTIFICATIONS_COLLECTION: len(NOTIFICATIONS),
    }


# ==============================================================================
# COMMAND LINE
# ==============================================================================

async def _run(reset: bool, admin_username: Optional[str]) -> None:
    adapter = await DatabaseFactory.initialize()
    try:
        created = await seed_database(adapter, reset=reset, admin_username=admin_username)
        logger.info("Seeding finished: %s", created or "nothing to do")
    finally:
        await DatabaseFactory.shutdown()


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Seed the Pawsitiv database with demo data.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="delete all existing data first",
    )
    parser.add_argument(
        "--admin",
        metavar="USERNAME",
        help="grant admin rights to this demo user",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
    asyncio.run(_run(args.reset, args.admin))


if __name__ == "__main__":
    main()
