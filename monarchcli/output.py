"""Response envelopes and the renderer that writes them."""

from __future__ import annotations

import dataclasses
import json
import sys
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any, TextIO

from .errors import MonarchError

SCHEMA_VERSION = "2026-05-08"

_GO_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


@dataclass
class Metadata:
    """Facts about the command that produced a response."""

    command: str
    profile: str
    duration_ms: int
    schema_version: str
    request_id: str = ""
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form, leaving out empty optional fields."""
        result: dict[str, Any] = {
            "command": self.command,
            "profile": self.profile,
            "duration_ms": self.duration_ms,
            "schema_version": self.schema_version,
        }
        if self.request_id:
            result["request_id"] = self.request_id
        if self.warnings:
            result["warnings"] = list(self.warnings)
        return result


@dataclass
class Envelope:
    """The wrapper around a successful result."""

    ok: bool
    data: Any
    meta: Metadata

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form."""
        result: dict[str, Any] = {"ok": self.ok}
        if self.data is not None:
            result["data"] = self.data
        result["meta"] = self.meta.to_dict()
        return result


@dataclass
class ErrorEnvelope:
    """The wrapper around a failure."""

    ok: bool
    error: MonarchError | None
    meta: Metadata

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form."""
        return {
            "ok": self.ok,
            "error": self.error.to_dict() if self.error is not None else None,
            "meta": self.meta.to_dict(),
        }


def _milliseconds(duration: timedelta) -> int:
    return int(duration / timedelta(milliseconds=1))


def new_envelope(
    command: str,
    profile: str,
    schema_version: str,
    request_id: str,
    data: Any,
    duration: timedelta,
) -> Envelope:
    """Build a success envelope."""
    return Envelope(
        ok=True,
        data=data,
        meta=Metadata(
            command=command,
            profile=profile,
            duration_ms=_milliseconds(duration),
            schema_version=schema_version,
            request_id=request_id,
        ),
    )


def new_error_envelope(
    command: str,
    profile: str,
    schema_version: str,
    error: MonarchError | None,
    duration: timedelta,
) -> ErrorEnvelope:
    """Build an error envelope."""
    return ErrorEnvelope(
        ok=False,
        error=error,
        meta=Metadata(
            command=command,
            profile=profile,
            duration_ms=_milliseconds(duration),
            schema_version=schema_version,
        ),
    )


def _json_default(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"object of type {type(value).__name__} is not JSON serializable")


def _encode(payload: Any, pretty: bool) -> str:
    if pretty:
        text = json.dumps(payload, default=_json_default, ensure_ascii=False, indent=2)
    else:
        text = json.dumps(payload, default=_json_default, ensure_ascii=False, separators=(",", ":"))
    return "".join(_GO_ESCAPES.get(ch, ch) for ch in text)


class Renderer:
    """Writes envelopes to the output streams."""

    def __init__(
        self,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
        json_mode: bool = False,
        pretty: bool = False,
    ) -> None:
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stderr = stderr if stderr is not None else sys.stderr
        self.json_mode = json_mode
        self.pretty = pretty

    def render_success(self, envelope: Envelope) -> None:
        """Write a success envelope as JSON; text output is left to each command."""
        if self.json_mode:
            text = _encode(envelope.to_dict(), self.pretty)
            self.stdout.write(text + "\n")

    def render_error(self, envelope: ErrorEnvelope) -> None:
        """Write an error as JSON to stdout, or as text to stderr."""
        if self.json_mode:
            text = _encode(envelope.to_dict(), self.pretty)
            self.stdout.write(text + "\n")
            return
        message = envelope.error.message if envelope.error is not None else ""
        self.stderr.write(f"Error: {message}\n")

    def print_diagnostic(self, message: str) -> None:
        """Write a diagnostic line to stderr."""
        self.stderr.write(f"{message}\n")