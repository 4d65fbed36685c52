from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(when: datetime) -> datetime:
    """Attach UTC to naive datetimes so they compare with ``utc_now()``."""
    if when.tzinfo is None:
        return when.replace(tzinfo=timezone.utc)
    return when
