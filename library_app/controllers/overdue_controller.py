from flask import Blueprint, jsonify

from library_app.errors import LibraryError
from library_app.extensions import db
from library_app.services.overdue_service import get_overdue_service
from library_app.services.user_service import UserService
from library_app.utils.decorators import admin_required
from library_app.utils.http import as_of_param, error_response, json_error

overdue_bp = Blueprint("overdue", __name__)


@overdue_bp.get("/")
def overdue_loans():
    try:
        as_of = as_of_param()
    except LibraryError as e:
        return error_response(e)

    service = get_overdue_service()
    return jsonify({"success": True, "as_of": as_of.isoformat(), "data": [
        {
            **loan.to_dict(),
            "days_overdue": loan.days_overdue(as_of),
            "fine": service.fine_for(loan, as_of),
        } for loan in service.overdue_loans(as_of)
    ]})


@overdue_bp.get("/report/<user_id>")
def mixed_media_report(user_id: str):
    user = UserService.find(user_id)
    if not user:
        return json_error("User not found", 404)
    try:
        report = get_overdue_service().mixed_media_report(user, as_of_param())
    except LibraryError as e:
        return error_response(e)
    return jsonify({"success": True, "data": report.to_dict()})


@overdue_bp.post("/assess")
@admin_required
def assess_fines():
    try:
        changed = get_overdue_service().assess_fines(as_of_param())
    except LibraryError as e:
        db.session.rollback()
        return error_response(e)
    db.session.commit()
    return jsonify({"success": True, "fines_changed": changed})
