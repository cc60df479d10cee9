# app/storage/__init__.py
from app.storage.base import Storage
from app.storage.manager import StorageManager
from app.storage.memory import MemoryStorage
from app.storage.sql import SqlStorage

__all__ = ["Storage", "StorageManager", "MemoryStorage", "SqlStorage"]
