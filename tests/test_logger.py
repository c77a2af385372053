"""
Tests for the logging setup.
"""

import logging

import pytest

from ideacoach.utils.logger import RedactApiKeyFilter, ideacoach_logger


def make_record(msg, *args):
    return logging.LogRecord("ideacoach", logging.WARNING, __file__, 1, msg, args, None)


class TestRedactApiKeyFilter:
    @pytest.mark.parametrize("url", [
        "https://example.test/v1beta/models/m:generateContent?key=secret123",
        "https://example.test/v1beta/models/m:generateContent?alt=json&key=secret123",
    ])
    def test_key_is_masked(self, url):
        record = make_record("Request to %s failed", url)

        assert RedactApiKeyFilter().filter(record)
        assert "secret123" not in record.getMessage()
        assert "key=***" in record.getMessage()

    def test_other_messages_are_untouched(self):
        record = make_record("Parsed %d ideas", 5)

        assert RedactApiKeyFilter().filter(record)
        assert record.args == (5,)
        assert record.getMessage() == "Parsed 5 ideas"


def test_ideacoach_logger_has_one_redacting_handler():
    redacting = [
        handler for handler in ideacoach_logger.handlers
        if any(isinstance(f, RedactApiKeyFilter) for f in handler.filters)
    ]

    assert len(redacting) == 1
    assert ideacoach_logger.propagate is False


if __name__ == "__main__":
    # This allows running the tests directly with python
    import sys
    sys.exit(pytest.main(["-v", __file__]))
