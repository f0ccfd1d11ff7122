from flask import current_app, jsonify

from democracy.extensions import db
from democracy.services.advance import run_bill_tick, run_economy_tick, run_election_tick
from democracy.services.cron_auth import cron_required


def _server_error():
    return jsonify({"success": False, "error": "Internal Server Error"}), 500


def register_cron_routes(app):
    @app.route("/api/game-advance")
    @cron_required
    def game_advance():
        try:
            outcome = run_election_tick()
        except Exception:
            db.session.rollback()
            current_app.logger.exception("Error advancing elections")
            return _server_error()

        if outcome["failed"]:
            return _server_error()
        return jsonify({"success": True, "results": outcome["results"]})

    @app.route("/api/bill-advance")
    @cron_required
    def bill_advance():
        try:
            summary = run_bill_tick()
        except Exception:
            db.session.rollback()
            current_app.logger.exception("Error processing bill advance")
            return _server_error()

        return jsonify(
            {
                "success": True,
                "skipped": summary["skipped"],
                "pool": summary.get("pool"),
                "next_pool": summary.get("next_pool"),
            }
        )

    @app.route("/api/hourly-advance")
    @cron_required
    def hourly_advance():
        try:
            summary = run_economy_tick()
        except Exception:
            db.session.rollback()
            current_app.logger.exception("Error advancing stocks")
            return _server_error()

        return jsonify(
            {
                "success": True,
                "skipped": summary["skipped"],
                "message": summary["message"],
            }
        )
