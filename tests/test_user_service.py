from datetime import date, timedelta

import pytest

from library_app.errors import AdminRequiredError, ValidationError
from library_app.extensions import mail
from library_app.models import Fine, Loan, User
from library_app.services.auth_service import AuthService
from library_app.services.borrow_service import BorrowService
from library_app.services.user_service import UserService

DAY0 = date(2025, 1, 1)


def test_register_rejects_duplicates(app):
    assert UserService.register(User(user_id="U1", name="Ann", email="ann@example.com")) is True
    assert UserService.register(User(user_id="U1", name="Other", email="other@example.com")) is False
    assert UserService.register(User(user_id="  ", name="Blank")) is False
    assert UserService.register(None) is False

    assert UserService.is_registered("U1")
    assert [u.name for u in UserService.list_users()] == ["Ann"]


def test_unregister_requires_admin(make_user):
    make_user()

    with pytest.raises(AdminRequiredError):
        UserService.unregister("U001", None)
    assert UserService.is_registered("U001")


def test_unregister_unknown_user(admin):
    assert UserService.unregister("nobody", admin) is False
    assert UserService.unregister(None, admin) is False


def test_unregister_blocked_by_active_loan(admin, make_user, make_item):
    user = make_user()
    BorrowService.borrow(user, make_item(), DAY0)

    with pytest.raises(ValidationError, match="active loans"):
        UserService.unregister("U001", admin)
    assert UserService.is_registered("U001")


def test_unregister_blocked_by_unpaid_fine(admin, make_user):
    user = make_user()
    BorrowService.add_fine(Fine.charge(user, 15))

    with pytest.raises(ValidationError, match="unpaid fines"):
        UserService.unregister("U001", admin)
    assert UserService.is_registered("U001")


def test_unregister_keeps_history_and_sends_confirmation(admin, make_user, make_item):
    user = make_user()
    loan = BorrowService.borrow(user, make_item(), DAY0)
    BorrowService.return_item(loan, DAY0 + timedelta(days=30))
    BorrowService.add_fine(Fine.charge(user, 20, loan=loan))
    BorrowService.pay_fine(user, 20)
    loan_id = loan.id

    with mail.record_messages() as outbox:
        assert UserService.unregister("U001", admin) is True

    assert not UserService.is_registered("U001")
    kept = Loan.query.filter_by(id=loan_id).one()
    assert kept.user_id is None
    assert Fine.query.count() == 1
    assert len(outbox) == 1
    assert outbox[0].subject == "Account Unregistration Confirmation"
    assert outbox[0].recipients == ["john@example.com"]
    assert outbox[0].body.startswith("Dear John Doe,")


def test_mail_failure_does_not_undo_removal(admin, make_user, failing_email):
    make_user()

    assert UserService.unregister("U001", admin, email_service=failing_email) is True

    assert not UserService.is_registered("U001")
    assert len(failing_email.sent) == 1


def test_mail_exception_does_not_undo_removal(admin, make_user):
    class Exploding:
        def send_email(self, to, subject, body):
            raise ConnectionError("smtp down")

    make_user()
    assert UserService.unregister("U001", admin, email_service=Exploding()) is True
    assert not UserService.is_registered("U001")


def test_admin_password_is_hashed(app):
    admin = AuthService.create_admin("root", "plain-secret")

    assert admin.password_hash != "plain-secret"
    assert admin.check_password("plain-secret")
    assert not admin.check_password("wrong")

    with pytest.raises(ValidationError):
        AuthService.create_admin("root", "again")
    with pytest.raises(ValidationError):
        AuthService.login("root", "wrong")
