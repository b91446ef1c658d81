import os

from sqlalchemy.engine import make_url

from library_app.policy import DEFAULT_POLICY


def _database_uri():
    """
    SQLALCHEMY_DATABASE_URI wins if set. Otherwise the launch parameters
    DB_URL / DB_USER / DB_PASSWORD are combined into a psycopg2 URL
    (e.g. DB_URL=postgresql://ep-xxx.neon.tech/library?sslmode=require).
    """
    explicit = os.getenv("SQLALCHEMY_DATABASE_URI")
    if explicit:
        return explicit

    raw = os.getenv("DB_URL", "postgresql://localhost:5432/library")
    if raw.startswith("jdbc:"):
        raw = raw[len("jdbc:"):]

    url = make_url(raw)
    if url.drivername in ("postgres", "postgresql"):
        url = url.set(drivername="postgresql+psycopg2")

    user = os.getenv("DB_USER")
    password = os.getenv("DB_PASSWORD")
    if user:
        url = url.set(username=user)
    if password:
        url = url.set(password=password)
    return url.render_as_string(hide_password=False)


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "library-secret-key")

    SQLALCHEMY_DATABASE_URI = _database_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}

    # create missing tables at startup (additive only, existing tables untouched)
    AUTO_CREATE_SCHEMA = os.getenv("AUTO_CREATE_SCHEMA", "1") == "1"

    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "library-jwt-secret")

    MAIL_SERVER = os.getenv("MAIL_SERVER", "smtp.gmail.com")
    MAIL_PORT = int(os.getenv("MAIL_PORT", "587"))
    MAIL_USE_TLS = True
    MAIL_USERNAME = os.getenv("MAIL_USERNAME", "")
    MAIL_PASSWORD = os.getenv("MAIL_PASSWORD", "")
    MAIL_DEFAULT_SENDER = os.getenv("MAIL_DEFAULT_SENDER", "noreply@library.local")
    NOTIFICATION_SUBJECT = os.getenv("NOTIFICATION_SUBJECT", "Library Notification")

    # periodic overdue check; off by default, `flask check-overdue` runs it on demand
    SCHEDULER_ENABLED = os.getenv("SCHEDULER_ENABLED", "0") == "1"
    SCHEDULER_INTERVAL_MINUTES = int(os.getenv("SCHEDULER_INTERVAL_MINUTES", "60"))

    LIBRARY_POLICY = DEFAULT_POLICY


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    AUTO_CREATE_SCHEMA = True
    MAIL_SUPPRESS_SEND = True
    SCHEDULER_ENABLED = False
    JWT_SECRET_KEY = "test-jwt-secret-key-with-enough-length"
