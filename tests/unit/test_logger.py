import logging

import pytest

from legal_ai.logging.logger import ContextFormatter, Log


def _record(**context: object) -> logging.LogRecord:
    return logging.makeLogRecord(
        {"name": "legal_ai", "levelname": "INFO", "msg": "Persisted analysis result", **context}
    )


class TestContextFormatter:
    def test_plain_message_is_unchanged(self) -> None:
        formatter = ContextFormatter("%(message)s")
        assert formatter.format(_record()) == "Persisted analysis result"

    def test_context_is_appended_sorted(self) -> None:
        formatter = ContextFormatter("[%(levelname)s] %(message)s")

        line = formatter.format(_record(kind="summarization", document=7))

        assert line == "[INFO] Persisted analysis result | document=7 kind=summarization"


class TestLog:
    @pytest.fixture(autouse=True)
    def restore_logger(self):
        logger = logging.getLogger("legal_ai")
        saved = (logger.level, list(logger.handlers), logger.propagate)
        yield
        logger.setLevel(saved[0])
        logger.handlers = saved[1]
        logger.propagate = saved[2]

    def test_configure_sets_level_and_single_handler(self) -> None:
        Log.configure("debug")
        Log.configure("warning")

        logger = logging.getLogger("legal_ai")
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, ContextFormatter)

    def test_configure_shares_handler_with_uvicorn(self) -> None:
        Log.configure("info")

        assert logging.getLogger("uvicorn.access").handlers == logging.getLogger("legal_ai").handlers

    def test_keyword_context_reaches_record(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="legal_ai"):
            Log.info("Extracted document content", document=3, chars=120)

        record = caplog.records[-1]
        assert record.document == 3
        assert record.chars == 120
