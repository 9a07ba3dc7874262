from __future__ import annotations

import logging
import uuid
from contextvars import ContextVar, Token
from typing import Optional

_TRACE_ID: ContextVar[Optional[str]] = ContextVar("drakonis_trace_id", default=None)


def gen_trace_id() -> str:
    return uuid.uuid4().hex


def set_current_trace_id(value: str) -> Token[Optional[str]]:
    return _TRACE_ID.set(value)


def get_current_trace_id() -> Optional[str]:
    return _TRACE_ID.get()


def clear_current_trace_id(token: Token[Optional[str]] | None = None) -> None:
    """Reset the trace id to the value before *token*, or to None without one."""
    if token is not None:
        _TRACE_ID.reset(token)
    else:
        _TRACE_ID.set(None)


class TraceIdFilter(logging.Filter):
    """Logging filter that stamps ``record.trace_id`` from the current context."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = get_current_trace_id()
        return True


__all__ = [
    "TraceIdFilter",
    "clear_current_trace_id",
    "gen_trace_id",
    "get_current_trace_id",
    "set_current_trace_id",
]
