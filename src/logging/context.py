# src/logging/context.py - v2
"""Contextual logging support: attach request_id, fingerprint and step to log records.

Context variables are task-local, so concurrent resolutions running on the
same event loop never see each other's values.
"""

from __future__ import annotations

import contextvars
import uuid
from dataclasses import dataclass
from typing import Any

_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)
_fingerprint: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "fingerprint", default=None
)
_step: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "step", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    request_id: str | None = None
    fingerprint: str | None = None
    step: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        request_id=_request_id.get(),
        fingerprint=_fingerprint.get(),
        step=_step.get(),
    )


def new_request_id() -> str:
    """Short random identifier for one resolution request."""
    return uuid.uuid4().hex[:12]


def set_resolution_context(fingerprint: str, request_id: str | None = None) -> str:
    """Set request-level context (called once per resolution). Returns the request id."""
    rid = request_id or new_request_id()
    _request_id.set(rid)
    _fingerprint.set(fingerprint)
    _step.set(None)
    return rid


def set_step_context(step: str | None) -> None:
    """Set the current pipeline step (extraction, geocode, verify, timezone...)."""
    _step.set(step)


def clear_context() -> None:
    """Reset all context variables."""
    _request_id.set(None)
    _fingerprint.set(None)
    _step.set(None)
