from flask import current_app, has_request_context, jsonify, request
from toolnav.extensions import db
from toolnav.models import ActivityLog

TRUTHY = ("1", "true", "on", "yes")

# Largest OFFSET a SQL INTEGER can carry
MAX_OFFSET = 2 ** 63 - 1

def log_activity(action, details=None):
    try:
        ip = request.remote_addr if has_request_context() else 'CLI'
        log = ActivityLog(action=action, details=details, ip_address=ip)
        db.session.add(log)
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Failed to record activity %r", action)

def json_error(message, status):
    return jsonify({"error": message}), status

def get_json_body():
    """Returns the request payload as a dict, accepting JSON or form data."""
    data = request.get_json(silent=True)
    if data is None:
        data = request.form.to_dict()
    return data if isinstance(data, dict) else None

def clean_str(value):
    """Strips strings and turns blanks into None."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None

def parse_bool(value):
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in TRUTHY

def positive_int_arg(name, default):
    """Reads a positive integer query arg, falling back to the default."""
    value = request.args.get(name, default=default, type=int)
    if value is None or value < 1:
        return default
    return value

def pagination_args():
    page = positive_int_arg("page", 1)
    limit = positive_int_arg("limit", current_app.config["DEFAULT_PAGE_SIZE"])
    limit = min(limit, current_app.config["MAX_PAGE_SIZE"])
    # Pages past the end are empty anyway; keep the offset representable
    page = min(page, MAX_OFFSET // limit)
    return page, limit
