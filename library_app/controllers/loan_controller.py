from flask import Blueprint, request, jsonify

from library_app.errors import LibraryError
from library_app.repositories.loan_repo import LoanRepo
from library_app.services.borrow_service import BorrowService
from library_app.services.item_service import ItemService
from library_app.services.user_service import UserService
from library_app.utils.http import as_of_param, error_response, json_error, text_field

loan_bp = Blueprint("loans", __name__)


@loan_bp.post("/")
def borrow_item():
    data = request.get_json(silent=True) or {}
    try:
        user_id = text_field(data, "user_id")
        item_type = text_field(data, "item_type")
        identifier = text_field(data, "identifier")
        if not user_id or not item_type or not identifier:
            return json_error("user_id, item_type and identifier are required", 400)

        as_of = as_of_param(data)
        user = UserService.find(user_id)
        if not user:
            return json_error("User not found", 404)
        item = ItemService.get_item(item_type, identifier)
        if not item:
            return json_error("Item not found", 404)

        loan = BorrowService.borrow(user, item, as_of)
    except LibraryError as e:
        return error_response(e)

    if loan is None:
        return json_error("Item is not available", 409)
    return jsonify({"success": True, "data": loan.to_dict()}), 201


@loan_bp.post("/<int:loan_id>/return")
def return_item(loan_id: int):
    loan = LoanRepo.get(loan_id)
    if not loan:
        return json_error("Loan not found", 404)
    try:
        BorrowService.return_item(loan, as_of_param())
    except LibraryError as e:
        return error_response(e)
    return jsonify({"success": True, "data": loan.to_dict()})


@loan_bp.get("/user/<user_id>")
def user_loans(user_id: str):
    user = UserService.find(user_id)
    if not user:
        return json_error("User not found", 404)

    loans = BorrowService.active_loans(user) if request.args.get("active") == "1" else BorrowService.loans_for(user)
    return jsonify({"success": True, "data": [l.to_dict() for l in loans]})


@loan_bp.get("/eligibility/<user_id>")
def eligibility(user_id: str):
    user = UserService.find(user_id)
    if not user:
        return json_error("User not found", 404)
    try:
        as_of = as_of_param()
    except LibraryError as e:
        return error_response(e)

    return jsonify({
        "success": True,
        "can_borrow": BorrowService.can_borrow(user, as_of),
        "unpaid_fines": BorrowService.has_unpaid_fines(user),
        "overdue_items": BorrowService.has_overdue_items(user, as_of),
    })
