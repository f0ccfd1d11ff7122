import enum

from democracy.clock import utcnow
from democracy.extensions import db

POOL_COUNT = 3


class BillStage(str, enum.Enum):
    HOUSE = "House"
    SENATE = "Senate"
    PRESIDENTIAL = "Presidential"


class BillStatus(str, enum.Enum):
    QUEUED = "Queued"
    VOTING = "Voting"
    PASSED = "Passed"
    DEFEATED = "Defeated"


class Bill(db.Model):
    __tablename__ = "bills"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    content = db.Column(db.Text, nullable=False)
    creator_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)
    stage = db.Column(db.String(50), nullable=False, default=BillStage.HOUSE.value)
    status = db.Column(db.String(50), nullable=False, default=BillStatus.QUEUED.value)
    pool = db.Column(db.Integer, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)


class BillVoteHouse(db.Model):
    __tablename__ = "bill_votes_house"

    id = db.Column(db.Integer, primary_key=True)
    bill_id = db.Column(db.Integer, db.ForeignKey("bills.id"), nullable=False)
    voter_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    vote_yes = db.Column(db.Boolean, nullable=False)


class BillVoteSenate(db.Model):
    __tablename__ = "bill_votes_senate"

    id = db.Column(db.Integer, primary_key=True)
    bill_id = db.Column(db.Integer, db.ForeignKey("bills.id"), nullable=False)
    voter_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    vote_yes = db.Column(db.Boolean, nullable=False)


class BillVotePresidential(db.Model):
    __tablename__ = "bill_votes_presidential"

    id = db.Column(db.Integer, primary_key=True)
    bill_id = db.Column(db.Integer, db.ForeignKey("bills.id"), nullable=False)
    voter_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    vote_yes = db.Column(db.Boolean, nullable=False)


CHAMBER_VOTE_MODELS = {
    BillStage.HOUSE: BillVoteHouse,
    BillStage.SENATE: BillVoteSenate,
    BillStage.PRESIDENTIAL: BillVotePresidential,
}
