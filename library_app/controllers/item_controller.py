# library_app/controllers/item_controller.py

from flask import Blueprint, request, jsonify

from library_app.errors import ValidationError
from library_app.services.item_service import ItemService
from library_app.utils.decorators import admin_required
from library_app.utils.http import json_error, text_field

item_bp = Blueprint("items", __name__)


@item_bp.get("/")
def list_items():
    try:
        items = ItemService.list_items(request.args.get("type"))
    except ValidationError as e:
        return json_error(str(e), 400)
    return jsonify({"success": True, "data": [i.to_dict() for i in items]})


@item_bp.get("/<item_type>/<identifier>")
def get_item(item_type: str, identifier: str):
    try:
        item = ItemService.get_item(item_type, identifier)
    except ValidationError as e:
        return json_error(str(e), 400)
    if not item:
        return json_error("Item not found", 404)
    return jsonify({"success": True, "data": item.to_dict()})


@item_bp.post("/")
@admin_required
def create_item():
    data = request.get_json(silent=True) or {}
    try:
        item = ItemService.add_item(
            data.get("item_type"),
            text_field(data, "identifier"),
            text_field(data, "title"),
            text_field(data, "creator"),
        )
        return jsonify({"success": True, "data": item.to_dict()}), 201
    except ValidationError as e:
        return json_error(str(e), 400)
