from flask import Blueprint, current_app, jsonify, request
from flask_login import login_required
from sqlalchemy.exc import SQLAlchemyError
from toolnav.models import ActivityLog
from toolnav.services import catalog
from toolnav.utils.helpers import json_error

api_bp = Blueprint('api', __name__, url_prefix='/api')

@api_bp.route('/stats')
@login_required
def stats():
    try:
        return jsonify(catalog.catalog_stats())
    except SQLAlchemyError:
        current_app.logger.exception("Error computing stats")
        return json_error('Failed to fetch stats', 500)

@api_bp.route('/activity')
@login_required
def activity():
    action = (request.args.get("action") or "").strip()
    limit = request.args.get("limit", default=50, type=int)
    limit = max(1, min(200, limit))
    try:
        q = ActivityLog.query
        if action:
            q = q.filter(ActivityLog.action.ilike(f"%{action}%"))
        logs = q.order_by(ActivityLog.timestamp.desc(), ActivityLog.id.desc()).limit(limit).all()
    except SQLAlchemyError:
        current_app.logger.exception("Error fetching activity")
        return json_error('Failed to fetch activity', 500)
    return jsonify([l.to_dict() for l in logs])
