"""Database access for categories and tools.

Routes call into these helpers instead of building queries themselves. Every
write commits immediately; callers handle ``SQLAlchemyError`` and roll back.
"""
from dataclasses import dataclass
from typing import Optional
from sqlalchemy import func, or_
from sqlalchemy.orm import joinedload
from toolnav.extensions import db
from toolnav.models import Category, Tool


@dataclass
class ToolFilters:
    category_id: Optional[str] = None
    search: Optional[str] = None
    featured_only: bool = False


# Categories

def list_categories():
    """Returns ``(category, tool_count)`` pairs ordered by name."""
    rows = db.session.query(Category, func.count(Tool.id))\
        .outerjoin(Tool, Tool.category_id == Category.id)\
        .group_by(Category.id)\
        .order_by(Category.name.asc())\
        .all()
    return [(category, int(count)) for category, count in rows]

def get_category(category_id):
    return db.session.get(Category, category_id)

def count_tools(category_id):
    return db.session.query(func.count(Tool.id)).filter(Tool.category_id == category_id).scalar() or 0

def slug_taken(slug, exclude_id=None):
    q = Category.query.filter(Category.slug == slug)
    if exclude_id:
        q = q.filter(Category.id != exclude_id)
    return db.session.query(q.exists()).scalar()

def create_category(name, slug, description=None):
    category = Category(name=name, slug=slug, description=description)
    db.session.add(category)
    db.session.commit()
    return category

def update_category(category, name, slug, description=None):
    category.name = name
    category.slug = slug
    category.description = description
    db.session.commit()
    return category

def delete_category(category):
    # ORM cascade removes the category's tools in the same flush
    db.session.delete(category)
    db.session.commit()


# Tools

def _filtered_tools(filters):
    q = Tool.query
    if filters.category_id:
        q = q.filter(Tool.category_id == filters.category_id)
    if filters.search:
        q = q.filter(or_(
            Tool.name.icontains(filters.search, autoescape=True),
            Tool.description.icontains(filters.search, autoescape=True),
            Tool.detailed_description.icontains(filters.search, autoescape=True),
        ))
    if filters.featured_only:
        q = q.filter(Tool.featured.is_(True))
    return q

def query_tools(filters, page, limit):
    """Returns one page of matching tools, newest first, and the total match count."""
    q = _filtered_tools(filters)
    total = q.order_by(None).count()
    tools = q.options(joinedload(Tool.category))\
        .order_by(Tool.created_at.desc(), Tool.id.desc())\
        .offset((page - 1) * limit)\
        .limit(limit)\
        .all()
    return tools, total

def get_tool(tool_id):
    return db.session.get(Tool, tool_id, options=[joinedload(Tool.category)])

def create_tool(name, url, description, category_id, detailed_description=None, icon=None, featured=False):
    tool = Tool(
        name=name,
        url=url,
        description=description,
        category_id=category_id,
        detailed_description=detailed_description,
        icon=icon,
        featured=featured,
    )
    db.session.add(tool)
    db.session.commit()
    return tool

def update_tool(tool, **fields):
    for key, value in fields.items():
        setattr(tool, key, value)
    db.session.commit()
    return tool

def delete_tool(tool):
    db.session.delete(tool)
    db.session.commit()


def catalog_stats():
    return {
        "tools": db.session.query(func.count(Tool.id)).scalar() or 0,
        "categories": db.session.query(func.count(Category.id)).scalar() or 0,
        "featured": db.session.query(func.count(Tool.id)).filter(Tool.featured.is_(True)).scalar() or 0,
    }
