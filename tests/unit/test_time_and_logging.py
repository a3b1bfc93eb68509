import io
import logging
from datetime import date

import pytest

from retireplan.core.logging import get_logger, setup_logging
from retireplan.utils.logging_redaction import (
    RedactingFilter,
    install_redaction_filter,
    redact_message,
)
from retireplan.utils.time import subtract_months, year_start


@pytest.mark.unit
@pytest.mark.parametrize("value,months,expected", [
    (date(2026, 6, 15), 3, date(2026, 3, 15)),
    (date(2026, 3, 31), 1, date(2026, 2, 28)),
    (date(2024, 3, 31), 1, date(2024, 2, 29)),
    (date(2026, 1, 15), 12, date(2025, 1, 15)),
    (date(2026, 2, 28), 60, date(2021, 2, 28)),
])
def test_subtract_months(value, months, expected):
    assert subtract_months(value, months) == expected


@pytest.mark.unit
def test_year_start():
    assert year_start(date(2026, 10, 18)) == date(2026, 1, 1)


@pytest.mark.unit
class TestRedaction:

    def test_date_of_birth_masked(self):
        assert redact_message("user 7 date_of_birth=1980-05-15") == "user 7 date_of_birth=[REDACTED]"

    def test_email_masked(self):
        assert redact_message("sent to jane.doe@example.com") == "sent to [EMAIL]"

    def test_bearer_token_masked(self):
        assert redact_message("Authorization: Bearer abc.def-123") == "Authorization: Bearer [REDACTED]"

    def test_filter_formats_args_first(self):
        record = logging.LogRecord(
            "test", logging.INFO, __file__, 1, "profile dob: %s", ("1990-01-02",), None
        )

        assert RedactingFilter().filter(record)
        assert record.getMessage() == "profile dob=[REDACTED]"

    def test_setup_logging_installs_filter_once_per_handler(self):
        setup_logging("DEBUG")
        setup_logging("DEBUG")

        root = logging.getLogger()
        assert root.handlers
        for handler in root.handlers:
            assert sum(isinstance(f, RedactingFilter) for f in handler.filters) == 1
        assert get_logger("retireplan.test").name == "retireplan.test"

    def test_child_logger_records_are_masked(self):
        """Records propagated from package loggers reach handlers redacted"""
        stream = io.StringIO()
        handler = logging.StreamHandler(stream)
        root = logging.getLogger()
        root.addHandler(handler)
        try:
            assert install_redaction_filter() >= 1
            child = logging.getLogger("retireplan.domain.services.example")
            child.warning("dob: %s", "1980-05-15")
            child.warning("notify %s", "jane.doe@example.com")
        finally:
            root.removeHandler(handler)

        output = stream.getvalue()
        assert "1980-05-15" not in output
        assert "dob=[REDACTED]" in output
        assert "[EMAIL]" in output
        assert "jane.doe@example.com" not in output

    def test_install_on_package_logger(self):
        stream = io.StringIO()
        package_logger = logging.getLogger("retireplan.redaction_test")
        handler = logging.StreamHandler(stream)
        package_logger.addHandler(handler)
        try:
            assert install_redaction_filter(package_logger) == 1
            assert install_redaction_filter(package_logger) == 0
            package_logger.warning("Authorization: Bearer abc.def-123")
        finally:
            package_logger.removeHandler(handler)

        assert "abc.def-123" not in stream.getvalue()
