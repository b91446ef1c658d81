from sqlalchemy import inspect

from library_app.extensions import db
import library_app.models  # noqa: F401  registers every table on db.metadata


def ensure_schema(app):
    """
    Creates tables that do not exist yet. Existing tables are never altered or
    dropped; column changes go through Flask-Migrate (`flask db upgrade`).
    """
    if not app.config.get("AUTO_CREATE_SCHEMA"):
        return []

    with app.app_context():
        existing = set(inspect(db.engine).get_table_names())
        db.create_all()
        created = sorted(set(db.metadata.tables) - existing)
        if created:
            app.logger.info(f"[schema] created tables: {', '.join(created)}")
        return created
