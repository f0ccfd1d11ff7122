import enum

from democracy.clock import utcnow
from democracy.extensions import db


class ElectionKind(str, enum.Enum):
    PRESIDENT = "President"
    SENATE = "Senate"


class ElectionStatus(str, enum.Enum):
    CANDIDATE = "Candidate"
    VOTING = "Voting"
    CONCLUDED = "Concluded"


class Election(db.Model):
    __tablename__ = "elections"

    election = db.Column(db.String(50), primary_key=True)
    status = db.Column(db.String(50), nullable=False, default=ElectionStatus.CANDIDATE.value)
    seats = db.Column(db.Integer, nullable=True)
    days_left = db.Column(db.Integer, nullable=False)


class Candidate(db.Model):
    __tablename__ = "candidates"
    __table_args__ = (db.UniqueConstraint("user_id", "election"),)

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    election = db.Column(db.String(50), db.ForeignKey("elections.election"), nullable=False)
    votes = db.Column(db.Integer, nullable=False, default=0)
    donations = db.Column(db.Numeric(14, 2), nullable=False, default=0)
    votes_per_hour = db.Column(db.Integer, nullable=False, default=0)
    donations_per_hour = db.Column(db.Numeric(14, 2), nullable=False, default=0)


class Vote(db.Model):
    __tablename__ = "votes"
    __table_args__ = (db.UniqueConstraint("user_id", "election", "candidate_id"),)

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    election = db.Column(db.String(50), db.ForeignKey("elections.election"), nullable=False)
    candidate_id = db.Column(db.Integer, nullable=False)


class CandidateSnapshot(db.Model):
    __tablename__ = "candidate_snapshots"

    id = db.Column(db.Integer, primary_key=True)
    candidate_id = db.Column(db.Integer, nullable=False)
    election = db.Column(db.String(50), nullable=False)
    votes = db.Column(db.Integer, nullable=False, default=0)
    donations = db.Column(db.Numeric(14, 2), nullable=False, default=0)
    snapshot_at = db.Column(db.DateTime, nullable=False, default=utcnow)
