from pathlib import Path
import sys
import os

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

# Safety default for any module-level app creation during test imports.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from democracy import create_app
from democracy.extensions import db
from democracy.models import Election, GameTracker, User


class ScriptedRandom:
    """Stand-in random source whose draws are chosen by the test.

    ``picks`` are consumed by ``choice`` and ``shuffle`` (the picked element
    is moved to the front); ``sample`` takes the first ``k`` elements.
    """

    def __init__(self, picks=None):
        self.picks = list(picks or [])

    def _next(self):
        return self.picks.pop(0) if self.picks else 0

    def choice(self, seq):
        return seq[self._next()]

    def shuffle(self, seq):
        seq.insert(0, seq.pop(self._next()))

    def sample(self, population, k):
        return list(population)[:k]


@pytest.fixture()
def app(tmp_path: Path):
    db_file = tmp_path / "test.sqlite3"
    app = create_app(
        {
            "TESTING": True,
            "ENV": "test",
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{db_file}",
            "SQLALCHEMY_ENGINE_OPTIONS": {},
            "SECRET_KEY": "test-secret",
            "SITE_URL": "https://democracyonline.io",
            "CRON_LOCAL_TOKEN": "local-token",
            "CRON_SCHEDULER_TOKEN": "prod-token",
            "ADMIN_EMAILS": ["admin@example.com"],
            "TICK_MIN_INTERVAL_SECONDS": 0,
            "RANDOM_SEED": 1234,
        }
    )

    with app.app_context():
        driver = db.engine.url.drivername
        if driver != "sqlite":
            raise RuntimeError(
                f"Test database must be SQLite, got '{driver}'. Refusing to run destructive test setup."
            )
        db.drop_all()
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def db_session(app):
    with app.app_context():
        yield db.session


@pytest.fixture()
def scripted_random(app):
    def install(picks=None):
        source = ScriptedRandom(picks)
        app.extensions["random_source"] = source
        return source

    return install


@pytest.fixture()
def world(db_session):
    president = Election(election="President", status="Candidate", seats=1, days_left=5)
    senate = Election(election="Senate", status="Candidate", seats=3, days_left=2)
    tracker = GameTracker(id=1, bill_pool=1)
    db_session.add_all([president, senate, tracker])
    db_session.commit()
    return {"President": president, "Senate": senate, "tracker": tracker}


@pytest.fixture()
def make_user(db_session):
    counter = {"n": 0}

    def factory(username=None, **fields):
        counter["n"] += 1
        username = username or f"user{counter['n']}"
        user = User(username=username, email=f"{username.replace(' ', '_')}@example.com", **fields)
        db_session.add(user)
        db_session.flush()
        return user

    return factory
