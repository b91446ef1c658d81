# library_app/controllers/fine_controller.py

from flask import Blueprint, jsonify, request

from library_app.repositories.fine_repo import FineRepo
from library_app.services.borrow_service import BorrowService
from library_app.services.user_service import UserService
from library_app.utils.http import json_error

fine_bp = Blueprint("fines", __name__)


@fine_bp.get("/<user_id>")
def user_fines(user_id: str):
    user = UserService.find(user_id)
    if not user:
        return json_error("User not found", 404)

    rows = FineRepo.list_by_user(user.id)
    return jsonify({
        "success": True,
        "outstanding": float(sum(f.amount for f in rows if not f.is_paid)),
        "data": [f.to_dict() for f in rows],
    })


@fine_bp.post("/<user_id>/pay")
def pay_fines(user_id: str):
    user = UserService.find(user_id)
    if not user:
        return json_error("User not found", 404)

    data = request.get_json(silent=True) or {}
    if not BorrowService.pay_fine(user, data.get("amount", 0)):
        return json_error("Payment rejected: amount must be positive and the user must owe a fine", 400)

    remaining = BorrowService.unpaid_fines(user)
    return jsonify({"success": True, "outstanding": float(sum(f.amount for f in remaining))})
