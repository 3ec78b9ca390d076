from __future__ import annotations

from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required, current_user
from pydantic import ValidationError

from utils.responses import json_body, validation_error, message

from .schemas import ExpenseCreateSchema, ExpenseFilterSchema, ExpenseUpdateSchema
from .services import (
    create_expense,
    delete_expense,
    find_owned_expense,
    list_expenses,
    update_expense,
)
from .stats import compute_stats


expenses_bp = Blueprint("expenses", __name__, url_prefix="/api/expenses")


@expenses_bp.route("", methods=["GET"])
@jwt_required()
def get_expenses():
    """
    All of the caller's expenses, newest first.

    Query parameters (all optional):
    - search: case-insensitive substring of the description
    - category: exact category
    - startDate / endDate: inclusive ISO-8601 bounds
    - minAmount / maxAmount: inclusive amount bounds
    """
    try:
        filters = ExpenseFilterSchema(**request.args.to_dict())
    except ValidationError as e:
        return validation_error(e)

    expenses = list_expenses(current_user.id, filters)
    return jsonify([e.to_dict() for e in expenses]), 200


@expenses_bp.route("/stats", methods=["GET"])
@jwt_required()
def get_stats():
    return jsonify(compute_stats(current_user.id)), 200


@expenses_bp.route("", methods=["POST"])
@jwt_required()
def post_expense():
    try:
        data = ExpenseCreateSchema(**json_body())
    except ValidationError as e:
        return validation_error(e)

    expense = create_expense(current_user.id, data)
    return jsonify(expense.to_dict()), 201


@expenses_bp.route("/<int:expense_id>", methods=["GET"])
@jwt_required()
def get_expense(expense_id):
    expense, error = find_owned_expense(expense_id, current_user.id)
    if error:
        return message(*error)
    return jsonify(expense.to_dict()), 200


@expenses_bp.route("/<int:expense_id>", methods=["PUT"])
@jwt_required()
def put_expense(expense_id):
    try:
        data = ExpenseUpdateSchema(**json_body())
    except ValidationError as e:
        return validation_error(e)

    expense, error = find_owned_expense(expense_id, current_user.id)
    if error:
        return message(*error)

    expense = update_expense(expense, data)
    return jsonify(expense.to_dict()), 200


@expenses_bp.route("/<int:expense_id>", methods=["DELETE"])
@jwt_required()
def remove_expense(expense_id):
    expense, error = find_owned_expense(expense_id, current_user.id)
    if error:
        return message(*error)

    delete_expense(expense)
    return jsonify({"message": "Expense removed"}), 200
