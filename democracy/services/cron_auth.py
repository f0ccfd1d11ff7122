import re
from functools import wraps
from urllib.parse import urlsplit

from flask import current_app, jsonify, request
from flask_login import current_user
from google.auth.exceptions import GoogleAuthError

from democracy.errors import AuthorizationError, CronMisconfiguredError
from democracy.services import security

SCHEDULER_EMAIL_PATTERN = re.compile(r"-scheduler@.*\.iam\.gserviceaccount\.com$")
LOCAL_HOSTNAMES = {"localhost", "127.0.0.1", "::1"}


def is_local_hostname(hostname):
    return hostname in LOCAL_HOSTNAMES


def is_admin_email(email, admin_emails):
    return any(admin.lower() == email.lower() for admin in admin_emails)


def _bearer_token(req):
    header = req.headers.get("Authorization", "")
    if not header.startswith("Bearer "):
        return None
    return header[len("Bearer "):]


def _authorize_admin(req, config):
    token = _bearer_token(req)
    if token:
        email = security.verify_admin_token(token, max_age=config["ADMIN_TOKEN_MAX_AGE"])
        if not email:
            raise AuthorizationError("Unauthorized - Invalid token")
    elif current_user.is_authenticated:
        email = current_user.email
    else:
        raise AuthorizationError()

    if not is_admin_email(email, config.get("ADMIN_EMAILS") or []):
        raise AuthorizationError()
    return f"admin {email}"


def authorize_cron_request(req, config):
    """Check that ``req`` comes from the scheduler or an administrator.

    Returns a description of the caller; raises ``AuthorizationError``
    otherwise.
    """
    if req.headers.get("X-Admin-Cron-Trigger") == "1":
        return _authorize_admin(req, config)

    scheduler_token = req.headers.get("X-Scheduler-Token")
    hostname = urlsplit(req.url).hostname
    if is_local_hostname(hostname) and config["ENV"] != "production":
        if not config.get("CRON_LOCAL_TOKEN"):
            current_app.logger.error("CRON_LOCAL_TOKEN not configured for local cron access")
            raise CronMisconfiguredError()
        if scheduler_token != config["CRON_LOCAL_TOKEN"]:
            raise AuthorizationError()
        return "local scheduler"

    if not config.get("CRON_SCHEDULER_TOKEN"):
        current_app.logger.error("CRON_SCHEDULER_TOKEN not configured")
        raise CronMisconfiguredError()
    if scheduler_token != config["CRON_SCHEDULER_TOKEN"]:
        raise AuthorizationError()

    token = _bearer_token(req)
    if not token:
        raise AuthorizationError()

    try:
        claims = security.verify_scheduler_id_token(token, audience=config["SITE_URL"])
    except (ValueError, GoogleAuthError) as exc:
        current_app.logger.error("Token validation failed: %s", exc)
        raise AuthorizationError("Unauthorized - Invalid token") from exc

    email = (claims or {}).get("email")
    if not email or not SCHEDULER_EMAIL_PATTERN.search(email):
        current_app.logger.error("Invalid service account: %s", email)
        raise AuthorizationError("Unauthorized - Invalid service account")
    return email


def cron_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        try:
            caller = authorize_cron_request(request, current_app.config)
        except AuthorizationError as exc:
            current_app.logger.warning("Rejected %s: %s", request.path, exc.message)
            return jsonify({"success": False, "error": exc.message}), exc.status

        current_app.logger.info("Authenticated request to %s from %s", request.path, caller)
        return view(*args, **kwargs)

    return wrapped
