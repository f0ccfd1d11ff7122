from flask_login import UserMixin

from democracy.clock import utcnow
from democracy.extensions import db

BANNED_USERNAME_PREFIX = "Banned User"


class User(UserMixin, db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(255), unique=True, nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    role = db.Column(db.String(50), nullable=False, default="Representative")
    party_id = db.Column(db.Integer, db.ForeignKey("parties.id"), nullable=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    # Whole days since the user was last seen.
    last_activity = db.Column(db.Integer, nullable=False, default=0)
    money = db.Column(db.Numeric(14, 2), nullable=False, default=100)
    created_at = db.Column(db.DateTime, default=utcnow)
