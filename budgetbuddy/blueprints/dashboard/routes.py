from datetime import date

from flask import Blueprint, current_app, jsonify

from ...services.summary import summarize
from ...storage import get_store
from ..helpers import request_user_id

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/api/dashboard")


@dashboard_bp.route("")
def index():
    expenses = get_store().get_expenses_by_user_id(request_user_id())
    summary = summarize(
        expenses,
        today=date.today(),
        monthly_budget=current_app.config["MONTHLY_BUDGET"],
    )
    return jsonify(summary.to_dict())
