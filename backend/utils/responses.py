from flask import jsonify, request
from pydantic import ValidationError


def json_body() -> dict:
    """Request JSON as a dict; anything else counts as an empty body."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def field_errors(exc: ValidationError) -> list:
    errors = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ())) or "body"
        message = err.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        errors.append({"field": field, "message": message})
    return errors


def validation_error(exc: ValidationError):
    return jsonify({"errors": field_errors(exc)}), 400


def message(text, status=400):
    return jsonify({"message": text}), status
