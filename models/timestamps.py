from datetime import datetime, timezone


def utcnow():
    return datetime.now(timezone.utc)


def to_iso(value):
    """ISO-8601 in UTC; naive values (SQLite drops tzinfo) are read as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()
