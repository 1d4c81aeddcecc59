import logging

from flask import Blueprint, jsonify, request

from ...records import CATEGORIES
from ...schemas import NewExpense, validate_payload
from ...storage import get_store
from ..helpers import error, request_user_id

logger = logging.getLogger(__name__)

expenses_bp = Blueprint("expenses", __name__, url_prefix="/api")


@expenses_bp.route("/expenses", methods=["GET"])
def list_expenses():
    expenses = get_store().get_expenses_by_user_id(request_user_id())
    return jsonify([e.to_dict() for e in expenses])


@expenses_bp.route("/expenses", methods=["POST"])
def create_expense():
    result = validate_payload(NewExpense, request.get_json(silent=True))
    if not result.ok:
        return error(result.message, 400)

    store = get_store()
    user_id = request_user_id()
    if store.get_user(user_id) is None:
        return error("User not found", 404)

    data = result.value
    exp = store.create_expense(
        user_id=user_id,
        amount=data.amount,
        category=data.category,
        date=data.date,
        note=data.note or None,
    )
    logger.info("Expense %s (%s %.2f) added for user %s", exp.id, exp.category, exp.amount, user_id)
    return jsonify(exp.to_dict()), 201


@expenses_bp.route("/categories")
def categories():
    return jsonify({"categories": list(CATEGORIES)})
