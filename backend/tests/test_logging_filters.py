"""Sensitive data scrubbing in log records."""
from __future__ import annotations

import logging

from rentalshop.security.logging_filters import (
    SensitiveFilter,
    install_sensitive_filter,
    mask_phone,
    scrub,
)


def _record(msg: str, *args: object) -> logging.LogRecord:
    return logging.LogRecord("rentalshop.test", logging.INFO, __file__, 1, msg, args, None)


def test_mask_phone_keeps_last_four_digits() -> None:
    assert mask_phone("(555) 201-3344") == "***-***-3344"
    assert mask_phone("12") == "***"
    assert mask_phone(None) is None


def test_scrub_masks_phone_fields_but_not_amounts() -> None:
    message = "row customer_phone=555-201-3344 revenue=450.00 date=2024-03-02"

    scrubbed = scrub(message)

    assert "555-201" not in scrubbed
    assert "customer_phone=***-***-3344" in scrubbed
    assert "revenue=450.00" in scrubbed
    assert "date=2024-03-02" in scrubbed


def test_scrub_redacts_bearer_tokens() -> None:
    assert "abc.def" not in scrub("Authorization: Bearer abc.def")


def test_filter_scrubs_message_and_arguments() -> None:
    record = _record("payload %s", '{"customerPhone": "555-201-3344"}')

    assert SensitiveFilter().filter(record) is True
    assert "555-201" not in record.getMessage()
    assert "3344" in record.getMessage()


def test_install_is_idempotent() -> None:
    name = "rentalshop.tests.filters"
    install_sensitive_filter(name, name)

    target = logging.getLogger(name)
    assert sum(isinstance(flt, SensitiveFilter) for flt in target.filters) == 1
