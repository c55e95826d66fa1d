from flask import Blueprint, current_app, request, jsonify
from flask_login import login_required, current_user
from ...errors import NotFoundError, ValidationError
from ...patches import TransactionPatch
from ...reporting.dates import parse_date, parse_date_range
from ...stores import ledger
from ...validation import parse_amount, parse_id, parse_kind

transactions_bp = Blueprint("transactions", __name__, url_prefix="/api/transactions")


def _fields_from(data):
    """Validate a full transaction body: categoryId, type, amount, date, note."""
    return dict(
        category_id=parse_id(data.get("categoryId"), "categoryId"),
        kind=parse_kind(data.get("type")),
        amount=parse_amount(data.get("amount"), sign="positive"),
        on_date=parse_date(data.get("date")),
        note=str(data.get("note") or ""),
    )


@transactions_bp.route("/", methods=["POST"])
@login_required
def create_transaction():
    data = request.get_json(silent=True) or {}
    tx = ledger.create(current_user.id, **_fields_from(data))
    return jsonify(tx.to_dict()), 201


@transactions_bp.route("/", methods=["GET"])
@login_required
def list_transactions():
    args = request.args
    kind = args.get("type")
    if kind is not None:
        kind = parse_kind(kind)
    category_id = args.get("categoryId")
    if category_id is not None:
        category_id = parse_id(category_id, "categoryId")
    date_range = None
    if args.get("start") or args.get("end"):
        date_range = parse_date_range(args.get("start"), args.get("end"))
    items = ledger.find(
        current_user.id,
        kind=kind,
        category_id=category_id,
        date_range=date_range,
        limit=current_app.config["TRANSACTION_LIST_LIMIT"],
    )
    return jsonify([t.to_dict() for t in items])


@transactions_bp.route("/purge/before/<cutoff>", methods=["DELETE"])
@login_required
def purge_before(cutoff):
    deleted = ledger.delete_older_than(current_user.id, parse_date(cutoff))
    return jsonify({"deletedCount": deleted})


@transactions_bp.route("/<tx_id>/inc", methods=["PATCH"])
@login_required
def increment_amount(tx_id):
    tx_id = parse_id(tx_id)
    data = request.get_json(silent=True) or {}
    tx = ledger.increment(current_user.id, tx_id, parse_amount(data.get("delta"), "delta"))
    return jsonify(tx.to_dict())


@transactions_bp.route("/<tx_id>", methods=["GET"])
@login_required
def get_transaction(tx_id):
    tx = ledger.find_by_id(current_user.id, parse_id(tx_id))
    if tx is None:
        raise NotFoundError("not found")
    return jsonify(tx.to_dict())


@transactions_bp.route("/<tx_id>", methods=["PUT"])
@login_required
def replace_transaction(tx_id):
    tx_id = parse_id(tx_id)
    data = request.get_json(silent=True) or {}
    tx = ledger.replace(current_user.id, tx_id, **_fields_from(data))
    return jsonify(tx.to_dict())


@transactions_bp.route("/<tx_id>", methods=["PATCH"])
@login_required
def update_transaction(tx_id):
    tx_id = parse_id(tx_id)
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("JSON object body is required")
    tx = ledger.update(current_user.id, tx_id, TransactionPatch.from_payload(data))
    return jsonify(tx.to_dict())


@transactions_bp.route("/<tx_id>", methods=["DELETE"])
@login_required
def delete_transaction(tx_id):
    ledger.delete(current_user.id, parse_id(tx_id))
    return jsonify({"ok": True})
