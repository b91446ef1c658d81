from flask import Blueprint, jsonify

from library_app.errors import LibraryError
from library_app.extensions import db
from library_app.repositories.notification_repo import NotificationRepo
from library_app.services.notification_service import get_notification_service
from library_app.services.user_service import UserService
from library_app.utils.decorators import admin_required
from library_app.utils.http import as_of_param, error_response, json_error

notif_bp = Blueprint("notifications", __name__)


@notif_bp.post("/reminders")
@admin_required
def send_reminders():
    try:
        reached = get_notification_service().send_overdue_reminders(as_of_param())
    except LibraryError as e:
        return error_response(e)
    db.session.commit()
    return jsonify({"success": True, "users_notified": reached})


@notif_bp.get("/<user_id>")
@admin_required
def user_notifications(user_id: str):
    user = UserService.find(user_id)
    if not user:
        return json_error("User not found", 404)
    return jsonify({"success": True, "data": [
        {
            "type": n.type,
            "channel": n.channel,
            "message": n.message,
            "success": bool(n.success),
            "error": n.error_message,
            "sent_at": n.sent_at.isoformat(),
        } for n in NotificationRepo.list_by_user(user.id)
    ]})
