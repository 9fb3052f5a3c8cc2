from datetime import UTC, datetime


def now() -> datetime:
    return datetime.now(UTC)


def now_ms() -> datetime:
    """Current UTC time truncated to milliseconds, the precision BSON dates keep."""
    current = now()
    return current.replace(microsecond=current.microsecond // 1000 * 1000)
