"""
Logging redaction helpers.
Redacts quote API credentials from log messages.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable


_PATTERNS: Iterable[tuple[re.Pattern, str]] = (
    # Authorization: Bearer <token>
    (re.compile(r"(Bearer\s+)([A-Za-z0-9\-\._]+)"), r"\1[REDACTED]"),
    # apikey / api_key / api-key in query strings or config dumps
    (re.compile(r"(?i)(api[_-]?key)\s*[:=]\s*([A-Za-z0-9\-\._]+)"), r"\1=[REDACTED]"),
    # Generic access token key/value
    (re.compile(r"(?i)(access_token|token)\s*[:=]\s*([A-Za-z0-9\-\._]+)"), r"\1=[REDACTED]"),
)


def redact_message(message: str) -> str:
    redacted = message
    for pattern, replacement in _PATTERNS:
        redacted = pattern.sub(replacement, redacted)
    return redacted


class RedactingFilter(logging.Filter):
    """Filter that redacts credentials from log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            record.msg = redact_message(record.getMessage())
            record.args = ()
        except (TypeError, ValueError):
            # Malformed format args: let the record through untouched
            pass
        return True


def install_redaction_filter() -> None:
    root = logging.getLogger()
    for existing in root.filters:
        if isinstance(existing, RedactingFilter):
            return
    root.addFilter(RedactingFilter())
    # Root logger filters do not run for records propagated from children
    for handler in root.handlers:
        if not any(isinstance(f, RedactingFilter) for f in handler.filters):
            handler.addFilter(RedactingFilter())
