from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime

from flask import current_app

from library_app.models.notification_log import NotificationLog
from library_app.repositories.notification_repo import NotificationRepo

DEFAULT_SUBJECT = "Library Notification"


class NotificationChannel(ABC):
    """Something that can get a message to a user."""

    channel_type = "Generic"

    @abstractmethod
    def notify(self, user, message: str) -> bool:
        ...


class EmailChannel(NotificationChannel):
    channel_type = "Email"

    def __init__(self, email_service, default_subject: str = None):
        if email_service is None:
            raise ValueError("email_service is required")
        self.email_service = email_service
        self.default_subject = default_subject or DEFAULT_SUBJECT

    def notify(self, user, message: str) -> bool:
        return self.notify_with_subject(user, None, message)

    def notify_with_subject(self, user, subject, message: str) -> bool:
        if user is None or not getattr(user, "email", None) or message is None:
            return False
        return bool(self.email_service.send_email(user.email, subject or self.default_subject, message))


def build_reminder_message(overdue_count: int) -> str:
    if overdue_count == 1:
        return "You have 1 overdue book."
    return f"You have {overdue_count} overdue book(s)."


class NotificationService:
    """
    Fans a message out to every attached channel, in the order they were
    attached. One channel failing (or raising) does not stop the others.
    """

    def __init__(self, overdue_service, initial_channel: NotificationChannel = None):
        if overdue_service is None:
            raise ValueError("overdue_service is required")
        self.overdue_service = overdue_service
        self._channels = []
        if initial_channel is not None:
            self.attach(initial_channel)

    @property
    def channels(self):
        return list(self._channels)

    def attach(self, channel: NotificationChannel) -> None:
        if channel is not None and channel not in self._channels:
            self._channels.append(channel)

    def detach(self, channel: NotificationChannel) -> None:
        if channel in self._channels:
            self._channels.remove(channel)

    def notify_all(self, user, message: str, notif_type: str = "overdue_reminder") -> int:
        """Returns how many channels delivered the message."""
        delivered = 0
        for channel in self._channels:
            channel_type = getattr(channel, "channel_type", type(channel).__name__)
            error = None
            try:
                ok = bool(channel.notify(user, message))
            except Exception as e:
                current_app.logger.warning(f"[notification] {channel_type} channel failed: {e}")
                ok, error = False, str(e)

            if ok:
                delivered += 1
            elif error is None:
                error = "not_delivered"

            NotificationRepo.log(NotificationLog(
                user_id=getattr(user, "id", None),
                type=notif_type,
                channel=channel_type,
                email=getattr(user, "email", None),
                message=message,
                success=ok,
                error_message=error,
                sent_at=datetime.utcnow(),
            ))
        return delivered

    def send_reminder(self, user, as_of: date = None) -> bool:
        if user is None or not user.email:
            return False
        as_of = as_of or date.today()

        overdue = self.overdue_service.overdue_loans_for_user(user, as_of)
        if not overdue:
            return False

        return self.notify_all(user, build_reminder_message(len(overdue))) > 0

    def send_overdue_reminders(self, as_of: date = None) -> int:
        """
        Remind every user with at least one overdue loan. Returns the number
        of users reached by at least one channel. No commit.
        """
        as_of = as_of or date.today()

        users = []
        for loan in self.overdue_service.overdue_loans(as_of):
            if loan.user is not None and loan.user not in users:
                users.append(loan.user)

        reached = sum(1 for user in users if self.send_reminder(user, as_of))
        current_app.logger.info(f"[notification] overdue users={len(users)} reached={reached}")
        return reached


def get_notification_service() -> NotificationService:
    return current_app.extensions["notification_service"]
