from datetime import date, timedelta

import pytest

from library_app.extensions import mail
from library_app.models import NotificationLog
from library_app.services.borrow_service import BorrowService
from library_app.services.mail_service import MailService
from library_app.services.notification_service import (
    EmailChannel,
    NotificationChannel,
    NotificationService,
    build_reminder_message,
)

DAY0 = date(2025, 1, 1)
LATE = DAY0 + timedelta(days=40)


class BrokenChannel(NotificationChannel):
    channel_type = "Broken"

    def notify(self, user, message):
        raise RuntimeError("gateway down")


@pytest.fixture
def service(app):
    return NotificationService(app.extensions["overdue_service"])


def test_email_channel_sends_to_user_address(make_user, fake_email):
    channel = EmailChannel(fake_email, "Test Subject")

    assert channel.notify(make_user(), "Test message") is True
    assert fake_email.sent == [
        {"to": "john@example.com", "subject": "Test Subject", "body": "Test message"}
    ]
    assert channel.channel_type == "Email"


def test_email_channel_custom_subject(make_user, fake_email):
    channel = EmailChannel(fake_email)

    assert channel.notify_with_subject(make_user(), "Custom Subject", "Custom message")
    assert fake_email.sent[0]["subject"] == "Custom Subject"
    assert channel.notify_with_subject(make_user("U2", email="b@example.com"), None, "x")
    assert fake_email.sent[1]["subject"] == "Library Notification"


def test_email_channel_rejects_missing_user_or_address(make_user, fake_email):
    channel = EmailChannel(fake_email)

    assert channel.notify(None, "Message") is False
    assert channel.notify(make_user(email=None), "Message") is False
    assert fake_email.sent == []
    with pytest.raises(ValueError):
        EmailChannel(None)


def test_attach_is_idempotent_and_detach_stops_delivery(service, make_user, fake_email):
    channel = EmailChannel(fake_email)
    user = make_user()

    service.attach(channel)
    service.attach(channel)
    service.attach(None)
    assert service.channels == [channel]
    assert service.notify_all(user, "hello") == 1

    service.detach(channel)
    service.detach(channel)
    assert service.notify_all(user, "hello") == 0
    assert len(fake_email.sent) == 1


def test_every_channel_is_tried(service, make_user, fake_email, failing_email):
    second = EmailChannel(fake_email, "Subject 2")
    service.attach(BrokenChannel())
    service.attach(EmailChannel(failing_email))
    service.attach(second)

    assert service.notify_all(make_user(), "Test message") == 1
    assert len(failing_email.sent) == 1
    assert len(fake_email.sent) == 1

    logs = NotificationLog.query.order_by(NotificationLog.id).all()
    assert [(l.channel, l.success) for l in logs] == [("Broken", False), ("Email", False), ("Email", True)]
    assert logs[0].error_message == "gateway down"


@pytest.mark.parametrize("count, expected", [
    (1, "You have 1 overdue book."),
    (2, "You have 2 overdue book(s)."),
    (3, "You have 3 overdue book(s)."),
])
def test_reminder_message(count, expected):
    assert build_reminder_message(count) == expected


def test_send_overdue_reminders(service, make_user, make_item, fake_email):
    one = make_user("U1", email="one@example.com")
    three = make_user("U3", email="three@example.com")
    on_time = make_user("U9", email="ok@example.com")
    BorrowService.borrow(one, make_item("BOOK"), DAY0)
    for _ in range(3):
        BorrowService.borrow(three, make_item("BOOK"), DAY0)
    BorrowService.borrow(on_time, make_item("BOOK"), LATE)
    service.attach(EmailChannel(fake_email))

    assert service.send_overdue_reminders(LATE) == 2

    bodies = {m["to"]: m["body"] for m in fake_email.sent}
    assert bodies == {
        "one@example.com": "You have 1 overdue book.",
        "three@example.com": "You have 3 overdue book(s).",
    }


def test_user_counts_only_with_a_successful_channel(service, make_user, make_item, failing_email):
    BorrowService.borrow(make_user(), make_item("CD"), DAY0)
    service.attach(EmailChannel(failing_email))

    assert service.send_overdue_reminders(LATE) == 0
    assert len(failing_email.sent) == 1


def test_no_channels_or_nothing_overdue(service, make_user, make_item, fake_email):
    user = make_user()
    BorrowService.borrow(user, make_item("CD"), DAY0)

    assert service.send_overdue_reminders(LATE) == 0

    service.attach(EmailChannel(fake_email))
    assert service.send_reminder(user, DAY0) is False
    assert service.send_reminder(None, LATE) is False
    assert fake_email.sent == []


def test_app_notification_service_uses_flask_mail(app, make_user, make_item):
    user = make_user()
    BorrowService.borrow(user, make_item("CD"), DAY0)
    service = app.extensions["notification_service"]

    with mail.record_messages() as outbox:
        assert service.send_overdue_reminders(LATE) == 1

    assert len(outbox) == 1
    assert outbox[0].recipients == ["john@example.com"]
    assert outbox[0].subject == "Library Notification"
    assert outbox[0].body == "You have 1 overdue book."


def test_mail_service_reports_missing_address(app):
    assert MailService.deliver("", "s", "b") == (False, "missing_email")
    assert MailService.send_email(None, "s", "b") is False
