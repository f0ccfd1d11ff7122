from flask import jsonify


def register_public_routes(app):
    @app.route("/api/health")
    def health():
        return jsonify({"ok": True})
