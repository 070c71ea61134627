from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def retention_cutoff(now: datetime, hours: int) -> datetime:
    """Oldest timestamp still retained; anything at or before it is stale."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now - timedelta(hours=hours)
