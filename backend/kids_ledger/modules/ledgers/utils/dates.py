from datetime import datetime, timezone


def NowUtc() -> datetime:
    return datetime.now(tz=timezone.utc)
