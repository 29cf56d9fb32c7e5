"""Tests for structured logging setup."""

import json
import logging

from sportsync.core.logging_config import generate_request_id, setup_logging


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_json_records_carry_service_info(self, capsys):
        """JSON output includes the event, level, service and environment."""
        setup_logging(
            json_output=True, log_level="INFO", service="SportSync API", environment="test"
        )

        logging.getLogger("sportsync.test").info("match created")

        line = capsys.readouterr().err.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "match created"
        assert record["level"] == "info"
        assert record["service"] == "SportSync API"
        assert record["env"] == "test"

    def test_levels(self):
        """Root level follows the setting and noisy libraries are quietened."""
        setup_logging(json_output=False, log_level="debug")

        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        """Unrecognised level names fall back to INFO."""
        setup_logging(json_output=False, log_level="chatty")

        assert logging.getLogger().level == logging.INFO


def test_request_ids_are_short_and_unique():
    """Request ids are 12 hex characters."""
    first, second = generate_request_id(), generate_request_id()

    assert len(first) == 12
    assert first != second
    int(first, 16)
