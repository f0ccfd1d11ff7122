from flask import current_app
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer


def _admin_serializer():
    return URLSafeTimedSerializer(current_app.config["SECRET_KEY"])


def generate_admin_token(email):
    return _admin_serializer().dumps(email, salt="admin-cron-trigger")


def verify_admin_token(token, max_age=3600):
    try:
        return _admin_serializer().loads(token, salt="admin-cron-trigger", max_age=max_age)
    except (BadSignature, SignatureExpired):
        return None


def verify_scheduler_id_token(token, audience):
    """Verify a Google-signed OIDC token and return its claims.

    Raises ``ValueError`` (or a google-auth error) when the token is
    malformed, expired, or minted for another audience.
    """
    return id_token.verify_oauth2_token(token, google_requests.Request(), audience=audience)
