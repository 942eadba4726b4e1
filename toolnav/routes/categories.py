from flask import Blueprint, current_app, jsonify
from flask_login import login_required
from sqlalchemy.exc import SQLAlchemyError
from toolnav.extensions import db
from toolnav.services import catalog
from toolnav.utils.helpers import log_activity, json_error, get_json_body, clean_str

categories_bp = Blueprint('categories', __name__, url_prefix='/api/categories')

def _category_fields():
    """Pulls category fields from the payload. Returns (fields, error)."""
    data = get_json_body()
    if data is None:
        return None, json_error('Invalid request body', 400)
    name = clean_str(data.get('name'))
    slug = clean_str(data.get('slug'))
    if not name or not slug:
        return None, json_error('Missing required fields', 400)
    return {
        'name': name,
        'slug': slug,
        'description': clean_str(data.get('description')),
    }, None

@categories_bp.route('', methods=['GET'])
def list_categories():
    try:
        rows = catalog.list_categories()
    except SQLAlchemyError:
        current_app.logger.exception("Error fetching categories")
        return json_error('Failed to fetch categories', 500)
    return jsonify([category.to_dict(tool_count=count) for category, count in rows])

@categories_bp.route('', methods=['POST'])
@login_required
def create():
    fields, error = _category_fields()
    if error:
        return error
    try:
        if catalog.slug_taken(fields['slug']):
            return json_error('Slug already exists', 400)
        category = catalog.create_category(**fields)
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Error creating category")
        return json_error('Failed to create category', 500)

    log_activity("Category Add", f"Added category: {category.slug}")
    return jsonify(category.to_dict(tool_count=0)), 201

@categories_bp.route('/<string:category_id>', methods=['GET'])
def detail(category_id):
    try:
        category = catalog.get_category(category_id)
        if not category:
            return json_error('Category not found', 404)
        count = catalog.count_tools(category.id)
    except SQLAlchemyError:
        current_app.logger.exception("Error fetching category %s", category_id)
        return json_error('Failed to fetch category', 500)
    return jsonify(category.to_dict(tool_count=count))

@categories_bp.route('/<string:category_id>', methods=['PUT'])
@login_required
def update(category_id):
    fields, error = _category_fields()
    if error:
        return error
    try:
        category = catalog.get_category(category_id)
        if not category:
            return json_error('Category not found', 404)
        if catalog.slug_taken(fields['slug'], exclude_id=category.id):
            return json_error('Slug already exists', 400)
        category = catalog.update_category(category, **fields)
        count = catalog.count_tools(category.id)
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Error updating category %s", category_id)
        return json_error('Failed to update category', 500)

    log_activity("Category Update", f"Updated category: {category.slug}")
    return jsonify(category.to_dict(tool_count=count))

@categories_bp.route('/<string:category_id>', methods=['DELETE'])
@login_required
def delete(category_id):
    try:
        category = catalog.get_category(category_id)
        if not category:
            return json_error('Category not found', 404)
        slug = category.slug
        removed_tools = catalog.count_tools(category.id)
        catalog.delete_category(category)
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Error deleting category %s", category_id)
        return json_error('Failed to delete category', 500)

    log_activity("Category Delete", f"Deleted category {slug} and {removed_tools} tool(s)")
    return jsonify({"success": True})
