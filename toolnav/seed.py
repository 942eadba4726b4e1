import click
from flask import current_app
from toolnav.extensions import db
from toolnav.models import AdminUser, Category, Tool

CATEGORIES = [
    {"name": "Development", "slug": "development", "description": "Programming and software development tools"},
    {"name": "Design", "slug": "design", "description": "UI/UX and graphic design tools"},
    {"name": "Productivity", "slug": "productivity", "description": "Tools that make everyday work faster"},
    {"name": "AI", "slug": "ai", "description": "Artificial intelligence tools"},
]

TOOLS = [
    {
        "name": "GitHub",
        "url": "https://github.com",
        "description": "The largest code hosting platform, with version control and collaborative development",
        "category": "development",
        "featured": True,
    },
    {
        "name": "Figma",
        "url": "https://www.figma.com",
        "description": "Browser-based collaborative interface design tool",
        "category": "design",
        "featured": True,
    },
    {
        "name": "Notion",
        "url": "https://www.notion.so",
        "description": "Notes, knowledge base and task management in one workspace",
        "category": "productivity",
        "featured": False,
    },
    {
        "name": "ChatGPT",
        "url": "https://chat.openai.com",
        "description": "Conversational AI assistant built by OpenAI",
        "category": "ai",
        "featured": True,
    },
]

def create_admin(username, password, email=None):
    """Creates the admin user, or resets its password if it already exists.

    Returns True when a new user was created.
    """
    user = AdminUser.query.filter_by(username=username).first()
    created = user is None
    if created:
        user = AdminUser(username=username, email=email, role="admin")
        db.session.add(user)
    elif email:
        user.email = email
    user.set_password(password)
    db.session.commit()
    return created

def seed_database():
    """Inserts the admin user, sample categories and sample tools.

    Existing rows (matched by username, slug, or tool name within its
    category) are left untouched, so running it twice is harmless.
    """
    config = current_app.config
    if not AdminUser.query.filter_by(username=config["ADMIN_USERNAME"]).first():
        create_admin(config["ADMIN_USERNAME"], config["ADMIN_PASSWORD"], config["ADMIN_EMAIL"])
        current_app.logger.info("Created admin user %s", config["ADMIN_USERNAME"])

    by_slug = {}
    for data in CATEGORIES:
        category = Category.query.filter_by(slug=data["slug"]).first()
        if not category:
            category = Category(**data)
            db.session.add(category)
            current_app.logger.info("Created category %s", data["slug"])
        by_slug[data["slug"]] = category
    db.session.flush()

    for data in TOOLS:
        category = by_slug[data["category"]]
        if Tool.query.filter_by(name=data["name"], category_id=category.id).first():
            continue
        fields = {k: v for k, v in data.items() if k != "category"}
        db.session.add(Tool(category_id=category.id, **fields))
        current_app.logger.info("Created tool %s", data["name"])

    db.session.commit()
    return by_slug

def register_commands(app):
    @app.cli.command("seed")
    def seed_command():
        """Seed the database with the admin user and sample data."""
        db.create_all()
        seed_database()
        click.echo("Database seeded.")
        click.echo(f"Admin login: {app.config['ADMIN_USERNAME']}")

    @app.cli.command("create-admin")
    @click.argument("username")
    @click.argument("password")
    @click.option("--email", default=None, help="Contact email for the admin.")
    def create_admin_command(username, password, email):
        """Create an admin user or reset its password."""
        db.create_all()
        if create_admin(username, password, email):
            click.echo(f"User {username} created successfully.")
        else:
            click.echo(f"User {username} password updated.")
