from flask import current_app, jsonify, request
from flask_login import current_user


def error(message, status):
    return jsonify({"message": message}), status


def request_user_id():
    """Owner for expense requests: ?userId=, then the session user, then the placeholder id."""
    user_id = request.args.get("userId")
    if user_id:
        return user_id
    if current_user.is_authenticated:
        return current_user.id
    return current_app.config["DEFAULT_USER_ID"]
