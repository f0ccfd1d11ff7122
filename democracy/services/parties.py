from flask import current_app
from sqlalchemy import delete, exists, select, update
from sqlalchemy.exc import SQLAlchemyError

from democracy.errors import BestEffortCleanupError
from democracy.extensions import db
from democracy.models import Party, PartyStance, User

INACTIVITY_DAYS = 7


def purge_empty_parties():
    """Delete parties nobody belongs to, along with their stances.

    Runs in a savepoint so a failure here leaves the caller's transaction
    usable. Returns the ids of the deleted parties.
    """
    try:
        with db.session.begin_nested():
            empty_ids = db.session.scalars(
                select(Party.id).where(~exists().where(User.party_id == Party.id))
            ).all()
            if empty_ids:
                db.session.execute(
                    delete(PartyStance).where(PartyStance.party_id.in_(empty_ids))
                )
                db.session.execute(delete(Party).where(Party.id.in_(empty_ids)))
    except SQLAlchemyError as exc:
        raise BestEffortCleanupError(f"Could not delete empty parties: {exc}") from exc

    for party_id in empty_ids:
        current_app.logger.info("Deleted empty party with ID: %s", party_id)
    return empty_ids


def age_user_activity():
    """Advance every user's idle-day counter and mark long-idle users inactive.

    Inactive users are dropped from their party, and from its leadership.
    Returns the number of users released from a party.
    """
    db.session.execute(
        update(User)
        .values(last_activity=User.last_activity + 1)
        .execution_options(synchronize_session=False)
    )
    db.session.execute(
        update(User)
        .where(User.last_activity >= INACTIVITY_DAYS)
        .values(is_active=False)
        .execution_options(synchronize_session=False)
    )

    idle_members = db.session.execute(
        select(User.id, User.party_id).where(
            User.is_active.is_(False), User.party_id.is_not(None)
        )
    ).all()
    for user_id, party_id in idle_members:
        db.session.execute(
            update(Party)
            .where(Party.id == party_id, Party.leader_id == user_id)
            .values(leader_id=None)
            .execution_options(synchronize_session=False)
        )

    if idle_members:
        db.session.execute(
            update(User)
            .where(User.is_active.is_(False), User.party_id.is_not(None))
            .values(party_id=None)
            .execution_options(synchronize_session=False)
        )
    return len(idle_members)
