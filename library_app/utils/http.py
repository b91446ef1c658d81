from datetime import date

from flask import jsonify, request

from library_app.errors import AdminRequiredError, LibraryStateError, ValidationError


def json_error(message, code=400):
    return jsonify({"success": False, "message": message}), code


def error_response(exc: Exception):
    if isinstance(exc, AdminRequiredError):
        return json_error(str(exc), 403)
    if isinstance(exc, LibraryStateError):
        return json_error(str(exc), 409)
    if isinstance(exc, ValidationError):
        return json_error(str(exc), 400)
    raise exc


def text_field(data: dict, name: str) -> str:
    """Stripped string value of a JSON field; numbers are accepted as text."""
    value = data.get(name)
    if value is None:
        return ""
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ValidationError(f"{name} must be a string")
    return str(value).strip()


def as_of_param(data: dict = None) -> date:
    """``as_of`` from the JSON body or query string (YYYY-MM-DD), today if absent."""
    if data is None:
        data = request.get_json(silent=True) or {}
    raw = data.get("as_of") or request.args.get("as_of")
    if not raw:
        return date.today()
    try:
        return date.fromisoformat(str(raw))
    except ValueError:
        raise ValidationError(f"as_of must be YYYY-MM-DD, got {raw!r}") from None
