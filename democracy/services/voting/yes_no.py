from sqlalchemy import func, select

from democracy.extensions import db
from democracy.models import CHAMBER_VOTE_MODELS, BillStage


def tally_chamber_votes(bill_id, chamber):
    chamber = BillStage(chamber)
    vote_model = CHAMBER_VOTE_MODELS[chamber]

    rows = db.session.execute(
        select(vote_model.vote_yes, func.count(vote_model.id))
        .where(vote_model.bill_id == bill_id)
        .group_by(vote_model.vote_yes)
    ).all()
    counts = {bool(vote_yes): count for vote_yes, count in rows}

    yes_votes = counts.get(True, 0)
    no_votes = counts.get(False, 0)

    return {
        "chamber": chamber,
        "yes_votes": yes_votes,
        "no_votes": no_votes,
        "total_votes": yes_votes + no_votes,
        # Ties fail.
        "decision": "PASSED" if yes_votes > no_votes else "FAILED",
    }
