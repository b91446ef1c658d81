from library_app.models.notification_log import NotificationLog
from library_app.extensions import db


class NotificationRepo:
    @staticmethod
    def list_by_user(user_pk: int):
        return NotificationLog.query.filter_by(user_id=user_pk).order_by(NotificationLog.id).all()

    @staticmethod
    def log(entry: NotificationLog):
        # no commit: the caller commits once per run
        db.session.add(entry)
        return entry
