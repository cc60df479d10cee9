# app/storage/manager.py
import logging

from app.storage.base import Storage
from app.storage.memory import MemoryStorage
from app.storage.sql import SqlStorage

logger = logging.getLogger(__name__)

BACKEND_MODES = ("auto", "database", "memory")


class StorageManager:
    """Routes every storage call to the database or the in-memory fallback.

    ``connect()`` decides once which backend is active: the database when
    ``SELECT 1`` succeeds, memory otherwise (unless ``mode`` forces one).
    Until ``connect()`` runs, calls go to memory.
    """

    def __init__(self, sql: SqlStorage, memory: MemoryStorage, mode: str = "auto"):
        if mode not in BACKEND_MODES:
            raise ValueError(f"Unknown storage backend {mode!r}, expected one of {BACKEND_MODES}")
        self.sql = sql
        self.memory = memory
        self.mode = mode
        self._active: Storage = memory

    @property
    def backend_name(self) -> str:
        return self._active.name

    @property
    def active(self) -> Storage:
        return self._active

    def connect(self) -> Storage:
        if self.mode == "memory":
            self._active = self.memory
            logger.info("Storage forced to in-memory mode")
            return self._active

        try:
            self.sql.ping()
            self.sql.init_schema()
        except Exception as exc:
            if self.mode == "database":
                raise
            logger.warning("Database unavailable (%s); falling back to in-memory storage", exc)
            self._active = self.memory
        else:
            logger.info("Connected to database storage")
            self._active = self.sql
        return self._active

    def __getattr__(self, name):
        # only reached for names not defined on the manager itself
        return getattr(self._active, name)
