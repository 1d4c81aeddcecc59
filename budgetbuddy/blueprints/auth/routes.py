import logging

from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required, login_user, logout_user
from werkzeug.security import generate_password_hash

from ...errors import DuplicateEmailError
from ...schemas import Credentials, validate_payload
from ...storage import get_store
from ..helpers import error

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@auth_bp.route("/signup", methods=["POST"])
def signup():
    result = validate_payload(Credentials, request.get_json(silent=True))
    if not result.ok:
        return error(result.message, 400)
    data = result.value
    try:
        user = get_store().create_user(data.email, generate_password_hash(data.password))
    except DuplicateEmailError as e:
        return error(str(e), 400)
    login_user(user)
    logger.info("New user %s signed up", user.id)
    return jsonify({"user": user.to_dict()})


@auth_bp.route("/signin", methods=["POST"])
def signin():
    result = validate_payload(Credentials, request.get_json(silent=True))
    if not result.ok:
        return error(result.message, 400)
    data = result.value
    user = get_store().get_user_by_email(data.email)
    if not user or not user.check_password(data.password):
        logger.warning("Failed sign-in for %s", data.email)
        return error("Invalid credentials", 401)
    login_user(user)
    return jsonify({"user": user.to_dict()})


@auth_bp.route("/signout", methods=["POST"])
def signout():
    logout_user()
    return jsonify({"message": "Signed out"})


@auth_bp.route("/me")
@login_required
def me():
    return jsonify({"user": current_user.to_dict()})
