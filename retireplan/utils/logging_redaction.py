"""
Logging redaction helpers.

Personal data (dates of birth, e-mails) and bearer tokens are masked
before a record is emitted. The filter sits on handlers, not loggers:
records propagated from `retireplan.*` loggers only pass through the
filters of the handlers they reach.
"""

import logging
import re
from typing import Optional, Sequence, Tuple

REDACTIONS: Sequence[Tuple[re.Pattern, str]] = (
    # date_of_birth=1980-05-15 / dob: 1980-05-15
    (re.compile(r"(?i)\b(date_of_birth|dob)\s*[:=]\s*\d{4}-\d{2}-\d{2}"), r"\1=[REDACTED]"),
    (re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}"), "[EMAIL]"),
    # Authorization: Bearer <token>
    (re.compile(r"(Bearer\s+)[A-Za-z0-9\-._~+/]+=*"), r"\1[REDACTED]"),
)


def redact_message(message: str) -> str:
    for pattern, replacement in REDACTIONS:
        message = pattern.sub(replacement, message)
    return message


class RedactingFilter(logging.Filter):
    """
    Handler filter that rewrites the formatted message in place.
    Args are merged into msg first so values passed as %-args are masked too.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            # Malformed format args; let the handler report it
            return True
        record.msg = redact_message(message)
        record.args = ()
        return True


def _has_redaction(handler: logging.Handler) -> bool:
    return any(isinstance(f, RedactingFilter) for f in handler.filters)


def install_redaction_filter(logger: Optional[logging.Logger] = None) -> int:
    """
    Attach a RedactingFilter to every handler of `logger` (root by default).

    Safe to call repeatedly; handlers that already redact are skipped.

    Returns:
        Number of handlers that received a new filter
    """
    target = logger or logging.getLogger()
    installed = 0
    for handler in target.handlers:
        if _has_redaction(handler):
            continue
        handler.addFilter(RedactingFilter())
        installed += 1
    return installed
