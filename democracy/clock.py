from datetime import datetime, timezone


def utcnow():
    """Current UTC time as a naive datetime, the form the DATETIME columns store."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
