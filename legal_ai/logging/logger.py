import logging
import sys

# Attributes every LogRecord carries; anything else came in as keyword context.
_RECORD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}

_SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


class ContextFormatter(logging.Formatter):
    """Appends keyword context (``document=7 kind=summarization``) to each line."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = {
            key: value for key, value in record.__dict__.items() if key not in _RECORD_ATTRS
        }
        if not context:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in sorted(context.items()))
        return f"{line} | {pairs}"


class Log:
    """Centralized logging for the service and the HTTP server it runs in."""

    _logger: logging.Logger = logging.getLogger("legal_ai")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Send service and uvicorn logs to one stdout handler at ``log_level``."""
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            ContextFormatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
        for logger in (cls._logger, *(logging.getLogger(n) for n in _SERVER_LOGGERS)):
            logger.setLevel(log_level.upper())
            logger.handlers = [handler]
            logger.propagate = False

    @classmethod
    def info(cls, message: str, **context: object) -> None:
        cls._logger.info(message, extra=context)

    @classmethod
    def error(cls, message: str, **context: object) -> None:
        cls._logger.error(message, extra=context)

    @classmethod
    def warning(cls, message: str, **context: object) -> None:
        cls._logger.warning(message, extra=context)

    @classmethod
    def debug(cls, message: str, **context: object) -> None:
        cls._logger.debug(message, extra=context)
