# backend/users/routes.py

from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required, current_user
from pydantic import ValidationError

from utils.responses import json_body, validation_error, message
from .schemas import ProfileUpdateSchema
from .services import update_profile


users_bp = Blueprint("users", __name__, url_prefix="/api/users")


@users_bp.route("/profile", methods=["GET"])
@jwt_required()
def get_profile():
    return jsonify(current_user.to_dict()), 200


@users_bp.route("/profile", methods=["PUT"])
@jwt_required()
def put_profile():
    try:
        data = ProfileUpdateSchema(**json_body())
    except ValidationError as e:
        return validation_error(e)

    user, error = update_profile(current_user, data)
    if error:
        return message(error, 400)

    return jsonify(user.to_public_dict()), 200
