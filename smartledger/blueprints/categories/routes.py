from flask import Blueprint, request, jsonify
from flask_login import login_required, current_user
from ...errors import ValidationError
from ...patches import CategoryPatch
from ...stores import categories
from ...validation import parse_id

categories_bp = Blueprint("categories", __name__, url_prefix="/api/categories")


@categories_bp.route("/", methods=["POST"])
@login_required
def create_category():
    data = request.get_json(silent=True) or {}
    cat = categories.create(current_user.id, data.get("name"))
    return jsonify(cat.to_dict()), 201


@categories_bp.route("/", methods=["GET"])
@login_required
def list_categories():
    return jsonify([c.to_dict() for c in categories.find_by_owner(current_user.id)])


@categories_bp.route("/<category_id>", methods=["PATCH"])
@login_required
def update_category(category_id):
    category_id = parse_id(category_id)
    patch = CategoryPatch.from_payload(request.get_json(silent=True) or {})
    if patch.is_empty():
        raise ValidationError("name is required")
    cat = categories.update(current_user.id, category_id, patch)
    return jsonify(cat.to_dict())


@categories_bp.route("/<category_id>", methods=["DELETE"])
@login_required
def delete_category(category_id):
    categories.delete(current_user.id, parse_id(category_id))
    return jsonify({"ok": True})
