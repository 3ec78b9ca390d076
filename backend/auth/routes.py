# backend/auth/routes.py

from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required, current_user
from pydantic import ValidationError

from auth.schemas import RegisterSchema, LoginSchema
from auth.services import register_user, login_user
from utils.responses import json_body, validation_error, message

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@auth_bp.route("/register", methods=["POST"])
def register():

    try:
        data = RegisterSchema(**json_body())
    except ValidationError as e:
        return validation_error(e)

    result, error = register_user(data)

    if error:
        return message(error, 400)

    return jsonify(result), 201


@auth_bp.route("/login", methods=["POST"])
def login():

    try:
        data = LoginSchema(**json_body())
    except ValidationError as e:
        return validation_error(e)

    result, error = login_user(data)

    if error:
        return message(error, 401)

    return jsonify(result), 200


@auth_bp.route("/me", methods=["GET"])
@jwt_required()
def me():
    return jsonify({"user": current_user.to_dict()}), 200
