# library_app/services/mail_service.py
from __future__ import annotations

from flask import current_app
from flask_mail import Message

from library_app.extensions import mail


class MailService:
    """
    E-mail transport backed by Flask-Mail. ``send_email`` is the only thing
    the notification side relies on; anything with the same signature (a fake
    in tests, another transport) can stand in for it.
    """

    @staticmethod
    def deliver(to_email: str, subject: str, body: str) -> tuple[bool, str | None]:
        """
        return: (success, error_text)
        """
        if not to_email:
            return False, "missing_email"
        try:
            msg = Message(subject=subject, recipients=[to_email], body=body)
            mail.send(msg)
            return True, None
        except Exception as e:
            current_app.logger.warning(f"[MailService] could not send mail to {to_email}: {e}")
            return False, str(e)

    @staticmethod
    def send_email(to_email: str, subject: str, body: str) -> bool:
        ok, _err = MailService.deliver(to_email, subject, body)
        return ok
