from democracy.clock import utcnow
from democracy.extensions import db


class Company(db.Model):
    __tablename__ = "companies"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    symbol = db.Column(db.String(10), unique=True, nullable=False)
    capital = db.Column(db.BigInteger, nullable=False, default=0)
    issued_shares = db.Column(db.BigInteger, nullable=False, default=0)
    creator_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)

    stock = db.relationship("Stock", backref="company", uselist=False, lazy=True)


class Stock(db.Model):
    __tablename__ = "stocks"

    id = db.Column(db.Integer, primary_key=True)
    company_id = db.Column(db.Integer, db.ForeignKey("companies.id"), nullable=True)
    price = db.Column(db.BigInteger, nullable=False)
    bought_today = db.Column(db.BigInteger, nullable=False, default=0)
    sold_today = db.Column(db.BigInteger, nullable=False, default=0)


class UserShare(db.Model):
    __tablename__ = "user_shares"
    __table_args__ = (db.UniqueConstraint("user_id", "company_id"),)

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    company_id = db.Column(db.Integer, db.ForeignKey("companies.id"), nullable=False)
    quantity = db.Column(db.BigInteger, nullable=False, default=0)


class SharePriceHistory(db.Model):
    __tablename__ = "share_price_history"

    id = db.Column(db.Integer, primary_key=True)
    stock_id = db.Column(db.Integer, nullable=False)
    price = db.Column(db.BigInteger, nullable=False)
    recorded_at = db.Column(db.DateTime, nullable=False, default=utcnow)
