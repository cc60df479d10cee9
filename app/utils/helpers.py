# app/utils/helpers.py
import datetime
import uuid


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime.datetime:
    # naive UTC, so values compare the same after a round trip through SQLite
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)


def is_blank(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def first_filled(*values, default=None):
    """Return the first value that is not None or an empty/whitespace string."""
    for value in values:
        if not is_blank(value):
            return value.strip() if isinstance(value, str) else value
    return default
