from datetime import timedelta

from flask import current_app
from sqlalchemy import or_, update
from sqlalchemy.exc import IntegrityError

from democracy.clock import utcnow
from democracy.extensions import db
from democracy.models import AdvanceLock


def claim_tick(job, min_interval_seconds=None, now=None):
    """Record that ``job`` is advancing now, unless it already did recently.

    Runs inside the caller's transaction, so a run that rolls back also
    releases its claim. Returns False when another run advanced ``job``
    less than ``min_interval_seconds`` ago.
    """
    if min_interval_seconds is None:
        min_interval_seconds = current_app.config["TICK_MIN_INTERVAL_SECONDS"]
    now = now or utcnow()

    if db.session.get(AdvanceLock, job) is None:
        try:
            with db.session.begin_nested():
                db.session.add(AdvanceLock(job=job, runs=0))
        except IntegrityError:
            current_app.logger.info("Advance lock row for %s created concurrently", job)

    threshold = now - timedelta(seconds=min_interval_seconds)
    result = db.session.execute(
        update(AdvanceLock)
        .where(
            AdvanceLock.job == job,
            or_(
                AdvanceLock.last_advanced_at.is_(None),
                AdvanceLock.last_advanced_at <= threshold,
            ),
        )
        .values(last_advanced_at=now, runs=AdvanceLock.runs + 1)
        .execution_options(synchronize_session=False)
    )

    if result.rowcount != 1:
        current_app.logger.warning(
            "Skipping %s: already advanced within the last %s seconds",
            job,
            min_interval_seconds,
        )
        return False
    return True
