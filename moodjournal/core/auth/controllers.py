"""Auth HTTP controllers (API only)."""

from __future__ import annotations

import logging

from flask import Blueprint, jsonify, request
from flask_login import login_required
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from moodjournal.core.auth import auth_service, token_service
from moodjournal.core.auth.bearer import current_access_token
from moodjournal.core.auth.schemas import LoginRequest, RegisterRequest
from moodjournal.core.utils.responses import field_errors, status_for
from moodjournal.core.utils.results import ErrorKind
from moodjournal.extensions import db, limiter

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth_api", __name__)


def _payload() -> dict:
    payload = request.get_json(silent=True)
    if payload is None:
        payload = request.form.to_dict()
    return payload if isinstance(payload, dict) else {}


@auth_bp.post("/login")
@limiter.limit("10/minute")
def login():
    try:
        data = LoginRequest.model_validate(_payload())
    except ValidationError as exc:
        return jsonify({"error": "validation error", "details": field_errors(exc)}), 422
    result = auth_service.login(data.email, data.password, data.device_name)
    if not result.ok:
        err = result.error
        return jsonify({"error": err.message, "details": err.details}), status_for(err)
    return jsonify({"login successful": result.value})


@auth_bp.post("/register")
@limiter.limit("5/minute")
def register():
    try:
        data = RegisterRequest.model_validate(_payload())
    except ValidationError as exc:
        return jsonify({"user already exist": field_errors(exc)}), 422
    result = auth_service.register(data)
    if not result.ok:
        err = result.error
        if err.kind == ErrorKind.VALIDATION:
            return jsonify({"user already exist": err.details}), status_for(err)
        return jsonify({"error": err.message}), status_for(err)
    return jsonify({"register successfull": result.value})


@auth_bp.delete("/logout")
@login_required
def logout():
    token = current_access_token()
    try:
        token_service.revoke(token)
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Token revocation failed")
        return jsonify({"error": "token could not be deleted"}), 500
    return jsonify({"success": "token successfully deleted"})
