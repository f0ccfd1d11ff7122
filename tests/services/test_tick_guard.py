from datetime import datetime, timedelta, timezone

from democracy.clock import utcnow
from democracy.models import AdvanceLock
from democracy.services.tick_guard import claim_tick


def test_utcnow_is_naive_utc():
    now = utcnow()

    assert now.tzinfo is None
    assert abs(now - datetime.now(timezone.utc).replace(tzinfo=None)) < timedelta(seconds=5)


def test_claim_records_naive_timestamp(db_session):
    before = utcnow()

    assert claim_tick("bills", min_interval_seconds=60) is True
    db_session.commit()

    lock = db_session.get(AdvanceLock, "bills")
    assert lock.runs == 1
    assert lock.last_advanced_at.tzinfo is None
    assert lock.last_advanced_at >= before.replace(microsecond=0)


def test_claim_waits_for_the_interval(db_session):
    start = datetime(2026, 3, 1, 12, 0)

    assert claim_tick("economy", min_interval_seconds=300, now=start) is True
    too_soon = start + timedelta(seconds=299)
    assert claim_tick("economy", min_interval_seconds=300, now=too_soon) is False
    assert claim_tick("economy", min_interval_seconds=300, now=start + timedelta(minutes=5)) is True
    db_session.commit()

    assert db_session.get(AdvanceLock, "economy").runs == 2
