from flask import current_app
from sqlalchemy import delete, func, select, update

from democracy.errors import BestEffortCleanupError, StaleStateError
from democracy.extensions import db
from democracy.models import (
    Candidate,
    Election,
    ElectionKind,
    ElectionStatus,
    User,
    Vote,
)
from democracy.models.user import BANNED_USERNAME_PREFIX
from democracy.services.feed import post_feed_item
from democracy.services.parties import age_user_activity, purge_empty_parties
from democracy.services.randomness import get_random_source
from democracy.services.tick_guard import claim_tick
from democracy.services.voting import select_president, select_senators

DEFAULT_ROLE = "Representative"
MIN_SENATE_SEATS = 3

# Days granted on entering each phase.
ELECTION_RULES = {
    ElectionKind.PRESIDENT: {
        "role": "President",
        "voting_days": 5,
        "concluded_days": 4,
        "candidate_days": 5,
    },
    ElectionKind.SENATE: {
        "role": "Senator",
        "voting_days": 2,
        "concluded_days": 3,
        "candidate_days": 2,
    },
}


def senate_seats_for(candidate_count):
    return max(MIN_SENATE_SEATS, (candidate_count + 1) // 2)


def _swap_election(election, **values):
    """Update ``election`` only if nobody changed its phase since we read it."""
    result = db.session.execute(
        update(Election)
        .where(
            Election.election == election.election,
            Election.status == election.status,
            Election.days_left == election.days_left,
        )
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        raise StaleStateError(
            f"{election.election} election changed while advancing "
            f"({election.status}, {election.days_left} days left)"
        )


def _open_voting(kind, election):
    rules = ELECTION_RULES[kind]
    values = {"status": ElectionStatus.VOTING.value, "days_left": rules["voting_days"]}

    if kind is ElectionKind.SENATE:
        candidate_count = db.session.scalar(
            select(func.count(Candidate.id)).where(Candidate.election == kind.value)
        )
        values["seats"] = senate_seats_for(candidate_count or 0)

    _swap_election(election, **values)
    return {"action": "opened_voting", **values}


def _grant_role(user_ids, role):
    if user_ids:
        db.session.execute(
            update(User)
            .where(User.id.in_(user_ids))
            .values(role=role)
            .execution_options(synchronize_session=False)
        )


def _strip_role(role):
    db.session.execute(
        update(User)
        .where(User.role == role)
        .values(role=DEFAULT_ROLE)
        .execution_options(synchronize_session=False)
    )


def _conclude_president(candidates, rng):
    role = ELECTION_RULES[ElectionKind.PRESIDENT]["role"]
    _strip_role(role)

    result = select_president(candidates, rng)
    winner = result["winner"]
    if winner is None:
        current_app.logger.info("Presidential election concluded without candidates")
        return {"elected": [], "appointed": []}

    if result["is_tie"]:
        current_app.logger.info(
            "Presidential tie at %s votes between %s candidates, drew user %s",
            result["top_vote_count"],
            len(result["tied"]),
            winner.user_id,
        )

    _grant_role([winner.user_id], role)
    post_feed_item("has been elected as the President!", user_id=winner.user_id)
    return {"elected": [winner.user_id], "appointed": []}


def _appoint_senators(open_seats, excluded_ids, rng):
    """Pick users uniformly at random from everyone not already involved."""
    candidate_user_ids = select(Candidate.user_id)
    eligible_ids = db.session.scalars(
        select(User.id)
        .where(
            User.is_active.is_(True),
            ~User.username.startswith(BANNED_USERNAME_PREFIX),
            User.role.not_in(["President", "Senator"]),
            User.id.not_in(candidate_user_ids),
        )
        .order_by(User.id)
    ).all()
    eligible_ids = [user_id for user_id in eligible_ids if user_id not in excluded_ids]

    return rng.sample(eligible_ids, min(open_seats, len(eligible_ids)))


def _conclude_senate(election, candidates, rng):
    role = ELECTION_RULES[ElectionKind.SENATE]["role"]
    _strip_role(role)

    result = select_senators(candidates, election.seats, rng)
    winner_ids = [candidate.user_id for candidate in result["winners"]]
    _grant_role(winner_ids, role)
    for user_id in winner_ids:
        post_feed_item("has been elected as a Senator!", user_id=user_id)

    appointed_ids = []
    if result["open_seats"] > 0:
        appointed_ids = _appoint_senators(result["open_seats"], set(winner_ids), rng)
        _grant_role(appointed_ids, role)
        for user_id in appointed_ids:
            post_feed_item("has been appointed as a Senator!", user_id=user_id)
        if len(appointed_ids) < result["open_seats"]:
            current_app.logger.warning(
                "Senate left with %s empty seats: not enough eligible users",
                result["open_seats"] - len(appointed_ids),
            )

    return {"elected": winner_ids, "appointed": appointed_ids}


def _conclude(kind, election, rng):
    candidates = Candidate.query.filter_by(election=kind.value).all()

    if kind is ElectionKind.PRESIDENT:
        outcome = _conclude_president(candidates, rng)
    else:
        outcome = _conclude_senate(election, candidates, rng)

    days_left = ELECTION_RULES[kind]["concluded_days"]
    _swap_election(election, status=ElectionStatus.CONCLUDED.value, days_left=days_left)
    return {
        "action": "concluded",
        "status": ElectionStatus.CONCLUDED.value,
        "days_left": days_left,
        **outcome,
    }


def _reset_cycle(kind, election):
    removed_votes = db.session.execute(
        delete(Vote).where(Vote.election == kind.value)
    ).rowcount
    removed_candidates = db.session.execute(
        delete(Candidate).where(Candidate.election == kind.value)
    ).rowcount

    days_left = ELECTION_RULES[kind]["candidate_days"]
    _swap_election(election, status=ElectionStatus.CANDIDATE.value, days_left=days_left)
    return {
        "action": "reset",
        "status": ElectionStatus.CANDIDATE.value,
        "days_left": days_left,
        "removed_candidates": removed_candidates,
        "removed_votes": removed_votes,
    }


def advance_election(kind, rng=None):
    """Advance one election kind by one day. The caller owns the transaction."""
    kind = ElectionKind(kind)
    rng = rng or get_random_source()

    election = db.session.get(Election, kind.value)
    if election is None:
        current_app.logger.warning("No %s election row, nothing to advance", kind.value)
        return {"action": "missing"}

    if election.days_left > 1:
        days_left = election.days_left - 1
        _swap_election(election, days_left=days_left)
        return {"action": "countdown", "status": election.status, "days_left": days_left}

    if election.status == ElectionStatus.CANDIDATE.value:
        return _open_voting(kind, election)
    if election.status == ElectionStatus.VOTING.value:
        return _conclude(kind, election, rng)
    if election.status == ElectionStatus.CONCLUDED.value:
        return _reset_cycle(kind, election)

    current_app.logger.warning(
        "%s election has unknown status %r, leaving it alone", kind.value, election.status
    )
    return {"action": "unknown_status", "status": election.status}


def _age_users():
    released = age_user_activity()
    if released:
        current_app.logger.info("Released %s inactive users from their parties", released)
    try:
        purge_empty_parties()
    except BestEffortCleanupError:
        current_app.logger.exception("Error deleting zero-member parties")
    return {"action": "aged", "released": released}


def run_election_tick(rng=None):
    """One simulated day: both elections, then user activity decay.

    Each part commits or rolls back on its own so a failure in one does not
    stop the others. Returns the per-part results and the names of the parts
    that failed.
    """
    rng = rng or get_random_source()
    parts = [
        (kind.value, f"election:{kind.value}", lambda kind=kind: advance_election(kind, rng))
        for kind in ElectionKind
    ]
    parts.append(("activity", "activity", _age_users))

    results = {}
    failed = []
    for name, job, step in parts:
        try:
            if claim_tick(job):
                results[name] = step()
            else:
                results[name] = {"action": "skipped"}
            db.session.commit()
        except Exception:
            db.session.rollback()
            current_app.logger.exception("Error handling %s advance", name)
            results[name] = {"action": "failed"}
            failed.append(name)
        else:
            current_app.logger.info("%s advance: %s", name, results[name])

    return {"results": results, "failed": failed}
