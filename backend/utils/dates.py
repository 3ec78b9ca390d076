from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current time as naive UTC, the form every stored datetime uses."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
