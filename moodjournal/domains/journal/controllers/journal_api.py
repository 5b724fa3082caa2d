"""Journal JSON API."""

from __future__ import annotations

from flask import Blueprint, jsonify, request, send_from_directory
from flask_login import current_user, login_required
from pydantic import ValidationError
from werkzeug.exceptions import RequestEntityTooLarge

from moodjournal.core.utils.responses import field_errors, merge_errors, status_for
from moodjournal.core.utils.results import ErrorKind, ServiceError
from moodjournal.domains.journal.mappers import map_detail, map_summary
from moodjournal.domains.journal.schemas.journal_schemas import (
    JournalEntryCreate,
    JournalEntryUpdate,
)
from moodjournal.domains.journal.services import image_service, journal_service

journal_api_bp = Blueprint("journal_api", __name__)
storage_bp = Blueprint("storage", __name__)

GENERIC_ERROR_MESSAGE = "Something went wrong"
STORAGE_CSP = "default-src 'none'; style-src 'unsafe-inline'; sandbox"


def _error(err: ServiceError):
    status = status_for(err)
    if err.kind == ErrorKind.VALIDATION:
        body = {"status": status, "message": "validation error", "error": err.details}
    elif err.kind == ErrorKind.INTERNAL:
        body = {"status": status, "message": GENERIC_ERROR_MESSAGE, "error": err.message}
    else:
        body = {"status": status, "message": "error", "error": err.message}
    return jsonify(body), status


def _validation_error(details: dict):
    return jsonify({"status": 422, "message": "validation error", "error": details}), 422


def _payload() -> dict:
    payload = request.get_json(silent=True)
    if payload is None:
        payload = request.form.to_dict()
    return payload if isinstance(payload, dict) else {}


def _user_id() -> int:
    return int(current_user.get_id())


@journal_api_bp.get("/index")
@login_required
def list_journal():
    result = journal_service.list_entries(_user_id())
    if not result.ok:
        return _error(result.error)
    if not result.value:
        return jsonify({"status": 200, "message": "no data available"})
    return jsonify({"status": 200, "data": [map_summary(r) for r in result.value]})


@journal_api_bp.get("/index/<int:entry_id>")
@login_required
def get_entry(entry_id: int):
    result = journal_service.get_entry(_user_id(), entry_id)
    if not result.ok:
        return _error(result.error)
    return jsonify({"status": 200, "data": map_detail(result.value)})


@journal_api_bp.post("/journal")
@login_required
def create_journal_entry():
    user_id = _user_id()
    try:
        image = request.files.get("image")
    except RequestEntityTooLarge:
        # Body exceeded MAX_CONTENT_LENGTH before the image could be checked.
        return _validation_error({"image": [image_service.size_error()]})
    try:
        data = JournalEntryCreate.model_validate(_payload())
    except ValidationError as exc:
        errors = field_errors(exc)
        if image is None:
            errors = merge_errors(errors, {"image": ["The image field is required."]})
        return _validation_error(errors)
    if data.user_id is not None and data.user_id != user_id:
        return _validation_error({"user_id": ["The user_id must match the authenticated user."]})

    result = journal_service.create_entry(
        user_id,
        title=data.title,
        description=data.description,
        mood_id=data.mood_id,
        image=image,
    )
    if not result.ok:
        return _error(result.error)
    return jsonify({"status": 200, "data": map_summary(result.value)})


@journal_api_bp.patch("/journal/<int:entry_id>")
@login_required
def update_journal_entry(entry_id: int):
    try:
        data = JournalEntryUpdate.model_validate(_payload())
    except ValidationError as exc:
        return _validation_error(field_errors(exc))
    result = journal_service.update_entry(
        _user_id(),
        entry_id,
        **data.model_dump(exclude_unset=True),
    )
    if not result.ok:
        return _error(result.error)
    return jsonify({"status": 200, "data": map_summary(result.value)})


@journal_api_bp.delete("/journal/<int:entry_id>")
@login_required
def delete_journal_entry(entry_id: int):
    result = journal_service.delete_entry(_user_id(), entry_id)
    if not result.ok:
        err = result.error
        if err.kind == ErrorKind.NOT_FOUND:
            return jsonify({"status": 404, "message": err.message}), 404
        return jsonify({"status": status_for(err), "error": err.message}), status_for(err)
    return jsonify({"status": 200, "message": "Data has been successfully deleted"})


@storage_bp.get("/<path:reference>")
def stored_image(reference: str):
    # send_from_directory rejects paths escaping the upload root.
    response = send_from_directory(
        image_service.upload_root(),
        reference,
        as_attachment=reference.lower().endswith(".svg"),
    )
    # SVG may carry script; never let stored files run in this origin.
    response.headers["Content-Security-Policy"] = STORAGE_CSP
    response.headers["X-Content-Type-Options"] = "nosniff"
    return response
