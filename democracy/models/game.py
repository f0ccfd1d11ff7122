from democracy.extensions import db

SINGLETON_ID = 1


class GameTracker(db.Model):
    __tablename__ = "game_tracker"

    id = db.Column(db.Integer, primary_key=True, default=SINGLETON_ID)
    bill_pool = db.Column(db.Integer, nullable=False, default=1)


class GameState(db.Model):
    __tablename__ = "game_state"

    id = db.Column(db.Integer, primary_key=True, default=SINGLETON_ID)
    current_game_hour = db.Column(db.Integer, nullable=False, default=0)


class AdvanceLock(db.Model):
    __tablename__ = "advance_locks"

    job = db.Column(db.String(50), primary_key=True)
    last_advanced_at = db.Column(db.DateTime, nullable=True)
    runs = db.Column(db.Integer, nullable=False, default=0)
