import pytest

from library_app import create_app
from library_app.config import TestConfig
from library_app.extensions import db
from library_app.models import User
from library_app.services.auth_service import AuthService
from library_app.services.item_service import ItemService
from library_app.services.user_service import UserService


class FakeEmailService:
    """Records outgoing mail instead of sending it."""

    def __init__(self, succeed=True):
        self.succeed = succeed
        self.sent = []

    def send_email(self, to, subject, body):
        self.sent.append({"to": to, "subject": subject, "body": body})
        return self.succeed


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    def _make(user_id="U001", name="John Doe", email="john@example.com"):
        user = User(user_id=user_id, name=name, email=email)
        assert UserService.register(user)
        return user
    return _make


@pytest.fixture
def make_item(app):
    counter = {"n": 0}

    def _make(item_type="BOOK", identifier=None, title=None, creator=None):
        counter["n"] += 1
        identifier = identifier or f"{item_type}-{counter['n']:04d}"
        return ItemService.add_item(item_type, identifier, title or f"Title {counter['n']}", creator)
    return _make


@pytest.fixture
def admin(app):
    return AuthService.create_admin("librarian", "s3cret-pass")


@pytest.fixture
def admin_headers(client, admin):
    resp = client.post("/auth/login", json={"username": "librarian", "password": "s3cret-pass"})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.get_json()['access_token']}"}


@pytest.fixture
def fake_email():
    return FakeEmailService()


@pytest.fixture
def failing_email():
    return FakeEmailService(succeed=False)
