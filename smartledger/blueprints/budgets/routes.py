from flask import Blueprint, request, jsonify
from flask_login import login_required, current_user
from ...reporting.dates import parse_month
from ...stores import budgets
from ...validation import parse_amount, parse_id

budgets_bp = Blueprint("budgets", __name__, url_prefix="/api/budgets")


def _limit_body():
    data = request.get_json(silent=True) or {}
    return parse_id(data.get("categoryId"), "categoryId"), parse_amount(data.get("limit"), "limit", sign="non_negative")


@budgets_bp.route("/<month>", methods=["GET"])
@login_required
def get_budget(month):
    parse_month(month)
    return jsonify(budgets.get_or_create(current_user.id, month).to_dict())


@budgets_bp.route("/<month>/limits", methods=["POST"])
@login_required
def add_limit(month):
    parse_month(month)
    category_id, cap = _limit_body()
    budget = budgets.add_limit(current_user.id, month, category_id, cap)
    return jsonify(budget.to_dict()), 201


@budgets_bp.route("/<month>/limits", methods=["PATCH"])
@login_required
def update_limit(month):
    parse_month(month)
    category_id, cap = _limit_body()
    budget = budgets.set_limit_cap(current_user.id, month, category_id, cap)
    return jsonify(budget.to_dict())


@budgets_bp.route("/<month>/limits/<category_id>", methods=["DELETE"])
@login_required
def remove_limit(month, category_id):
    parse_month(month)
    budget = budgets.remove_limit(current_user.id, month, parse_id(category_id, "categoryId"))
    return jsonify(budget.to_dict())
