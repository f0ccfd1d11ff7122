from democracy.clock import utcnow
from democracy.extensions import db


class Party(db.Model):
    __tablename__ = "parties"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), unique=True, nullable=False)
    color = db.Column(db.String(7), nullable=False, default="#3b82f6")
    leader_id = db.Column(db.Integer, nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)

    members = db.relationship("User", backref="party", lazy=True)
    stances = db.relationship("PartyStance", backref="party", lazy=True)


class PartyStance(db.Model):
    __tablename__ = "party_stances"

    id = db.Column(db.Integer, primary_key=True)
    party_id = db.Column(db.Integer, db.ForeignKey("parties.id"), nullable=False)
    stance_id = db.Column(db.Integer, nullable=False)
    value = db.Column(db.String(1024), nullable=False)
