from flask import Flask

from democracy.config import Config
from democracy.extensions import db, login_manager, migrate
from democracy.models import User
from democracy.routes import register_routes
from democracy.services.randomness import init_random_source


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    init_random_source(app)
    register_routes(app)
    return app


app = create_app()

__all__ = ["app", "db", "migrate", "create_app"]
