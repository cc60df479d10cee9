# app/db/init_db.py
import logging

from app.core.config import settings
from app.db.seed import seed_storage


def init_storage(storage_manager):
    """Pick the storage backend (creating tables when it is the database) and seed it."""
    from app import models  # noqa: F401  import to ensure modules define models

    storage_manager.connect()
    logging.info("Using %s storage", storage_manager.backend_name)
    if settings.SEED_ON_STARTUP:
        seed_storage(storage_manager)
