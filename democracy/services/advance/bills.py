from flask import current_app
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError

from democracy.errors import BestEffortCleanupError, StageProcessingError, StaleStateError
from democracy.extensions import db
from democracy.models import Bill, BillStage, BillStatus, GameTracker
from democracy.models.bill import POOL_COUNT
from democracy.models.game import SINGLETON_ID
from democracy.services.parties import purge_empty_parties
from democracy.services.tick_guard import claim_tick
from democracy.services.voting import tally_chamber_votes

# Later chambers first, so a bill promoted this run is not tallied again
# in the chamber it just entered.
STAGE_ORDER = (
    (BillStage.PRESIDENTIAL, None),
    (BillStage.SENATE, BillStage.PRESIDENTIAL),
    (BillStage.HOUSE, BillStage.SENATE),
)


def next_pool(pool):
    return 1 if pool >= POOL_COUNT else pool + 1


def _tracker():
    tracker = db.session.get(GameTracker, SINGLETON_ID)
    if tracker is None:
        tracker = GameTracker.query.order_by(GameTracker.id).first()
    if tracker is None:
        current_app.logger.warning("No game tracker row, starting at pool 1")
        tracker = GameTracker(id=SINGLETON_ID, bill_pool=1)
        db.session.add(tracker)
        db.session.flush()
    return tracker


def resolve_stage(stage, promote_to, pool):
    """Tally every voting bill in ``stage`` belonging to ``pool``."""
    bills = (
        Bill.query.filter_by(stage=stage.value, status=BillStatus.VOTING.value, pool=pool)
        .order_by(Bill.id)
        .all()
    )

    outcome = {"passed": [], "promoted": [], "defeated": []}
    for bill in bills:
        tally = tally_chamber_votes(bill.id, stage)

        if tally["decision"] != "PASSED":
            bill.status = BillStatus.DEFEATED.value
            outcome["defeated"].append(bill.id)
        elif promote_to is None:
            bill.status = BillStatus.PASSED.value
            outcome["passed"].append(bill.id)
        else:
            bill.stage = promote_to.value
            bill.status = BillStatus.VOTING.value
            outcome["promoted"].append(bill.id)

        current_app.logger.info(
            "Bill %s (%s): %s yes / %s no -> %s %s",
            bill.id,
            stage.value,
            tally["yes_votes"],
            tally["no_votes"],
            bill.stage,
            bill.status,
        )

    db.session.flush()
    return outcome


def draw_next_bill(pool):
    """Move the oldest queued House bill into voting in ``pool``."""
    bill = (
        Bill.query.filter_by(stage=BillStage.HOUSE.value, status=BillStatus.QUEUED.value)
        .order_by(Bill.created_at, Bill.id)
        .first()
    )
    if bill is None:
        return None

    bill.status = BillStatus.VOTING.value
    bill.pool = pool
    db.session.flush()
    return bill


def rotate_pool(tracker, pool):
    result = db.session.execute(
        update(GameTracker)
        .where(GameTracker.id == tracker.id, GameTracker.bill_pool == pool)
        .values(bill_pool=next_pool(pool))
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        raise StaleStateError(f"Bill pool moved away from {pool} during the run")
    return next_pool(pool)


def run_bill_tick():
    """Close the current pool, draw the next bill and rotate.

    Everything up to the rotation is committed together; the caller rolls
    back on error.
    """
    if not claim_tick("bills"):
        db.session.commit()
        return {"skipped": True}

    tracker = _tracker()
    pool = tracker.bill_pool or 1
    summary = {"skipped": False, "pool": pool, "stages": {}}

    for stage, promote_to in STAGE_ORDER:
        try:
            summary["stages"][stage.value] = resolve_stage(stage, promote_to, pool)
        except SQLAlchemyError as exc:
            raise StageProcessingError(f"{stage.value} bills", exc) from exc

    drawn = draw_next_bill(pool)
    summary["drawn"] = drawn.id if drawn else None
    summary["next_pool"] = rotate_pool(tracker, pool)

    try:
        summary["deleted_parties"] = purge_empty_parties()
    except BestEffortCleanupError:
        current_app.logger.exception("Error deleting zero-member parties")
        summary["deleted_parties"] = []

    db.session.commit()
    current_app.logger.info("Closed bill pool %s, next pool %s", pool, summary["next_pool"])
    return summary
