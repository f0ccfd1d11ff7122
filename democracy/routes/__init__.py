from democracy.routes.cron import register_cron_routes
from democracy.routes.public import register_public_routes


def register_routes(app):
    register_public_routes(app)
    register_cron_routes(app)
