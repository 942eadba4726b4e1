import math
from flask import Blueprint, current_app, jsonify, request
from flask_login import login_required
from sqlalchemy.exc import SQLAlchemyError
from toolnav.extensions import db
from toolnav.services import catalog
from toolnav.services.catalog import ToolFilters
from toolnav.utils.helpers import (
    log_activity, json_error, get_json_body, clean_str, parse_bool, pagination_args,
)

tools_bp = Blueprint('tools', __name__, url_prefix='/api/tools')

def _tool_fields():
    """Pulls tool fields from the payload. Returns (fields, error)."""
    data = get_json_body()
    if data is None:
        return None, json_error('Invalid request body', 400)
    fields = {
        'name': clean_str(data.get('name')),
        'url': clean_str(data.get('url')),
        'description': clean_str(data.get('description')),
        'category_id': clean_str(data.get('categoryId')),
        'detailed_description': clean_str(data.get('detailedDescription')),
        'icon': clean_str(data.get('icon')),
        'featured': parse_bool(data.get('featured')),
    }
    if not all(fields[k] for k in ('name', 'url', 'description', 'category_id')):
        return None, json_error('Missing required fields', 400)
    return fields, None

@tools_bp.route('', methods=['GET'])
def list_tools():
    page, limit = pagination_args()
    filters = ToolFilters(
        category_id=clean_str(request.args.get('categoryId')),
        search=clean_str(request.args.get('search')),
        featured_only=request.args.get('featured') == 'true',
    )
    try:
        tools, total = catalog.query_tools(filters, page, limit)
        items = [t.to_dict() for t in tools]
    except SQLAlchemyError:
        current_app.logger.exception("Error fetching tools")
        return json_error('Failed to fetch tools', 500)

    return jsonify({
        "tools": items,
        "pagination": {
            "total": total,
            "page": page,
            "limit": limit,
            "totalPages": math.ceil(total / limit),
        }
    })

@tools_bp.route('', methods=['POST'])
@login_required
def create():
    fields, error = _tool_fields()
    if error:
        return error
    try:
        if not catalog.get_category(fields['category_id']):
            return json_error('Category not found', 400)
        tool = catalog.create_tool(**fields)
        payload = tool.to_dict()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Error creating tool")
        return json_error('Failed to create tool', 500)

    log_activity("Tool Add", f"Added tool: {tool.name}")
    return jsonify(payload), 201

@tools_bp.route('/<string:tool_id>', methods=['GET'])
def detail(tool_id):
    try:
        tool = catalog.get_tool(tool_id)
        if not tool:
            return json_error('Tool not found', 404)
        payload = tool.to_dict()
    except SQLAlchemyError:
        current_app.logger.exception("Error fetching tool %s", tool_id)
        return json_error('Failed to fetch tool', 500)
    return jsonify(payload)

@tools_bp.route('/<string:tool_id>', methods=['PUT'])
@login_required
def update(tool_id):
    fields, error = _tool_fields()
    if error:
        return error
    try:
        tool = catalog.get_tool(tool_id)
        if not tool:
            return json_error('Tool not found', 404)
        if not catalog.get_category(fields['category_id']):
            return json_error('Category not found', 400)
        tool = catalog.update_tool(tool, **fields)
        payload = tool.to_dict()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Error updating tool %s", tool_id)
        return json_error('Failed to update tool', 500)

    log_activity("Tool Update", f"Updated tool: {tool.name}")
    return jsonify(payload)

@tools_bp.route('/<string:tool_id>', methods=['DELETE'])
@login_required
def delete(tool_id):
    try:
        tool = catalog.get_tool(tool_id)
        if not tool:
            return json_error('Tool not found', 404)
        name = tool.name
        catalog.delete_tool(tool)
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Error deleting tool %s", tool_id)
        return json_error('Failed to delete tool', 500)

    log_activity("Tool Delete", f"Deleted tool: {name}")
    return jsonify({"success": True})
