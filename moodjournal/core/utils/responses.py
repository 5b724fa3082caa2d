"""Translation of service results into HTTP status codes and payload fragments."""

from __future__ import annotations

from typing import Dict, List

from pydantic import ValidationError

from moodjournal.core.utils.results import ErrorKind, ServiceError

STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.VALIDATION: 422,
    ErrorKind.INVALID_CREDENTIALS: 422,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL: 500,
}


def status_for(error: ServiceError) -> int:
    """The one place where service error kinds become HTTP status codes."""
    return STATUS_BY_KIND.get(error.kind, 500)


def field_errors(exc: ValidationError) -> Dict[str, List[str]]:
    """Collapse pydantic errors into ``{field: [message, ...]}``."""
    errors: Dict[str, List[str]] = {}
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ())) or "__root__"
        msg = err.get("msg", "invalid value")
        if err.get("type") == "missing":
            msg = f"The {loc} field is required."
        errors.setdefault(loc, []).append(msg)
    return errors


def merge_errors(*groups: Dict[str, List[str]]) -> Dict[str, List[str]]:
    merged: Dict[str, List[str]] = {}
    for group in groups:
        for key, messages in group.items():
            merged.setdefault(key, []).extend(messages)
    return merged
