from flask import Blueprint, request, jsonify
from flask_login import login_required, current_user
from ...reporting.aggregator import report_for_range
from ...reporting.dates import month_span, parse_date_range
from ...reporting.reconciler import reconcile

reports_bp = Blueprint("reports", __name__, url_prefix="/api/reports")


@reports_bp.route("/by-category")
@login_required
def by_category():
    span = parse_date_range(request.args.get("start"), request.args.get("end"))
    kind = request.args.get("type", "expense")
    rows = report_for_range(current_user.id, kind, span)
    return jsonify({
        "start": span.start.isoformat(),
        "end": span.end.isoformat(),
        "type": kind,
        "data": [r.to_dict() for r in rows],
    })


@reports_bp.route("/budget-vs-spent")
@login_required
def budget_vs_spent():
    month = request.args.get("month")
    span = month_span(month)
    rows = reconcile(current_user.id, month, span)
    return jsonify({
        "month": month,
        "start": span.start.isoformat(),
        "end": span.end.isoformat(),
        "data": [r.to_dict() for r in rows],
    })
