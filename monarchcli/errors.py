"""Structured errors raised by the command-line client."""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Machine-readable error codes."""

    API_ERROR = "API_ERROR"
    FEATURE_UNAVAILABLE = "FEATURE_UNAVAILABLE"
    READ_ONLY_VIOLATION = "READ_ONLY_VIOLATION"
    CONFIRMATION_REQUIRED = "CONFIRMATION_REQUIRED"


class ErrorCategory(str, Enum):
    """Broad classes of failure."""

    API = "api"
    SAFETY = "safety"


class MonarchError(Exception):
    """An error carrying a code, a category and optional details."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        category: ErrorCategory,
        retryable: bool = False,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.code = ErrorCode(code)
        self.message = message
        self.category = ErrorCategory(category)
        self.retryable = retryable
        self.details = details

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def __repr__(self) -> str:
        return (
            f"MonarchError(code={self.code.value!r}, message={self.message!r}, "
            f"category={self.category.value!r}, retryable={self.retryable!r})"
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form of the error."""
        result: dict[str, Any] = {
            "code": self.code.value,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        if self.details is not None:
            result["details"] = self.details
        return result


def feature_unavailable(message: str) -> MonarchError:
    """Build the error reported for features the service does not offer."""
    return MonarchError(ErrorCode.FEATURE_UNAVAILABLE, message, ErrorCategory.API, False, None)