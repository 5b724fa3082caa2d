"""Explicit success/error return values for service operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    VALIDATION = "validation_error"
    INVALID_CREDENTIALS = "invalid_credentials"
    NOT_FOUND = "not_found"
    INTERNAL = "internal_error"


@dataclass(frozen=True)
class ServiceError:
    kind: ErrorKind
    message: str
    # field name -> list of messages, for validation failures
    details: Dict[str, List[str]] = field(default_factory=dict)


@dataclass(frozen=True)
class Result(Generic[T]):
    value: Optional[T] = None
    error: Optional[ServiceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any = None) -> "Result":
        return cls(value=value)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str,
        details: Optional[Dict[str, List[str]]] = None,
    ) -> "Result":
        return cls(error=ServiceError(kind=kind, message=message, details=details or {}))

    @classmethod
    def invalid(cls, field_name: str, message: str) -> "Result":
        """Single-field validation failure."""
        return cls.failure(ErrorKind.VALIDATION, "validation error", {field_name: [message]})

    @classmethod
    def not_found(cls, message: str = "not found") -> "Result":
        return cls.failure(ErrorKind.NOT_FOUND, message)

    @classmethod
    def internal(cls, message: str = "internal error") -> "Result":
        return cls.failure(ErrorKind.INTERNAL, message)


__all__ = ["ErrorKind", "ServiceError", "Result"]
