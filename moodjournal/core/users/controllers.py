"""User profile API."""

from __future__ import annotations

import logging

from flask import Blueprint, jsonify
from flask_login import current_user, login_required

from moodjournal.core.users.schemas import serialize_user
from moodjournal.core.users.services import get_user

logger = logging.getLogger(__name__)

user_api_bp = Blueprint("user_api", __name__)


@user_api_bp.get("/user")
@login_required
def api_user():
    user = get_user(current_user.get_id())
    if not user:
        logger.error("Authenticated token points at missing user %s", current_user.get_id())
        return jsonify({"error": "user data unavailable"}), 500
    return jsonify(serialize_user(user).model_dump())
