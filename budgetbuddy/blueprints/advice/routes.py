from flask import Blueprint, jsonify, request

from ...schemas import AdviceRequest, validate_payload
from ...services.advice import get_advice_service
from ..helpers import error

advice_bp = Blueprint("advice", __name__, url_prefix="/api")


@advice_bp.route("/ai-advice", methods=["POST"])
def ai_advice():
    result = validate_payload(AdviceRequest, request.get_json(silent=True))
    if not result.ok:
        return error("No expenses provided", 400)

    advice = get_advice_service().get_advice(result.value.expenses)
    if not advice.ok:
        return jsonify({"message": advice.message, "tips": advice.tips}), 500
    return jsonify({"tips": advice.tips})
