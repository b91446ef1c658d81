from flask import Flask, jsonify

from library_app.config import Config
from library_app.extensions import db, migrate, jwt, mail
from library_app.db_schema import ensure_schema
from library_app.policy import DEFAULT_POLICY
from library_app.services.mail_service import MailService
from library_app.services.notification_service import EmailChannel, NotificationService
from library_app.services.overdue_service import OverdueDetectionService


def create_app(config_object=None):
    app = Flask(__name__)
    app.config.from_object(config_object or Config)

    # 1) db first, everything below needs db.engine / db.session
    db.init_app(app)

    # 2) create missing tables (additive only)
    ensure_schema(app)

    # 3) other extensions
    migrate.init_app(app, db)
    jwt.init_app(app)
    mail.init_app(app)

    # 4) services built once per app from the configured policy
    policy = app.config.get("LIBRARY_POLICY") or DEFAULT_POLICY
    overdue_service = OverdueDetectionService(policy)
    app.extensions["overdue_service"] = overdue_service
    app.extensions["notification_service"] = NotificationService(
        overdue_service,
        EmailChannel(MailService, app.config.get("NOTIFICATION_SUBJECT")),
    )

    # 5) API blueprints
    from library_app.controllers.auth_controller import auth_bp
    from library_app.controllers.item_controller import item_bp
    from library_app.controllers.user_controller import user_bp
    from library_app.controllers.loan_controller import loan_bp
    from library_app.controllers.fine_controller import fine_bp
    from library_app.controllers.overdue_controller import overdue_bp
    from library_app.controllers.notification_controller import notif_bp
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(item_bp, url_prefix="/items")
    app.register_blueprint(user_bp, url_prefix="/users")
    app.register_blueprint(loan_bp, url_prefix="/loans")
    app.register_blueprint(fine_bp, url_prefix="/fines")
    app.register_blueprint(overdue_bp, url_prefix="/overdue")
    app.register_blueprint(notif_bp, url_prefix="/notifications")

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    from library_app.cli import register_commands
    register_commands(app)

    # periodic overdue check (off unless SCHEDULER_ENABLED)
    from library_app.tasks.scheduler import start_scheduler
    start_scheduler(app)

    return app
