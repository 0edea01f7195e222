"""Logging filters that scrub sensitive content."""

from __future__ import annotations

import logging
import re

_TOKEN_PATTERN = re.compile(
    r"(Authorization: Bearer\s+[\w\.-]+|access_token\"\s*:\s*\"[^\"]+\")",
    re.IGNORECASE,
)
# Customer phone numbers travel with every report row.
_PHONE_PATTERN = re.compile(
    r"(phone\w*[\"']?\s*[:=]\s*[\"']?)(\+?[\d][\d\s().-]*\d)",
    re.IGNORECASE,
)


def mask_phone(value: str | None) -> str | None:
    """Keep only the last four digits of a phone number."""
    if not value:
        return value
    digits = [ch for ch in value if ch.isdigit()]
    if len(digits) < 4:
        return "***"
    return f"***-***-{''.join(digits[-4:])}"


def scrub(message: str) -> str:
    message = _TOKEN_PATTERN.sub("**REDACTED**", message)
    return _PHONE_PATTERN.sub(
        lambda match: f"{match.group(1)}{mask_phone(match.group(2))}", message
    )


class SensitiveFilter(logging.Filter):
    """Replace tokens and phone numbers in log messages with masked values."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = scrub(record.msg)
        if record.args:
            if isinstance(record.args, dict):
                record.args = {
                    key: scrub(value) if isinstance(value, str) else value
                    for key, value in record.args.items()
                }
            else:
                record.args = tuple(
                    scrub(arg) if isinstance(arg, str) else arg for arg in record.args
                )
        return True


def install_sensitive_filter(*logger_names: str) -> None:
    """Attach a single :class:`SensitiveFilter` to each named logger."""
    for name in logger_names:
        target = logging.getLogger(name)
        if not any(isinstance(flt, SensitiveFilter) for flt in target.filters):
            target.addFilter(SensitiveFilter())


__all__ = ["SensitiveFilter", "install_sensitive_filter", "mask_phone", "scrub"]
