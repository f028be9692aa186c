import inspect
import logging
import os
import sys

from pythonjsonlogger import jsonlogger

# Structured fields whose values are credentials and must never be logged in full
SECRET_FIELDS = frozenset({"api_token", "apiToken", "client_secret", "clientSecret", "token"})


def mask_secret(value: str | None, visible: int = 5) -> str:
    """Return a short preview of a credential that is safe to log."""
    if not value:
        return ""
    return f"{value[:visible]}..."


def _caller_location(depth: int = 2) -> str:
    frame = inspect.currentframe()
    for _ in range(depth):
        if frame is None:
            break
        frame = frame.f_back
    if frame is None:
        return "unknown:0"
    return f"{frame.f_code.co_filename}:{frame.f_lineno}"


class Logger(logging.LoggerAdapter):
    """Process-wide JSON logger writing to stderr.

    Keyword arguments passed to the log methods become structured fields;
    credential fields are masked.
    """

    _instance = None
    _initialized = False

    def __new__(cls) -> "Logger":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if Logger._initialized:
            return

        level_name = os.getenv("LOG_LEVEL", "INFO").upper()
        level = logging.getLevelNamesMapping().get(level_name, logging.INFO)

        formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(message)s",
            rename_fields={"asctime": "@timestamp", "levelname": "log_level"},
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        # stdout carries the MCP stdio stream
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)

        logger = logging.getLogger("sinch_mcp")
        logger.setLevel(level)
        logger.addHandler(handler)
        logger.propagate = False

        super().__init__(logger)
        Logger._initialized = True

    def error(self, msg: str, *args: tuple, **kwargs: dict) -> None:
        """Log an error, tagged with the caller's file and line."""
        kwargs["file"] = _caller_location()
        self.log(logging.ERROR, msg, *args, **kwargs)

    def exception(
        self, msg: str, *args: tuple, exc_info: bool = True, **kwargs: dict
    ) -> None:
        """Log an error with traceback, tagged with the caller's file and line."""
        kwargs["file"] = _caller_location()
        self.log(logging.ERROR, msg, *args, exc_info=exc_info, **kwargs)

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:
        # logging's own keyword arguments stay top-level, the rest go to 'extra'
        passthrough = {
            key: kwargs.pop(key)
            for key in ("exc_info", "stack_info", "stacklevel")
            if kwargs.get(key) is not None
        }
        for key in ("exc_info", "stack_info", "stacklevel"):
            kwargs.pop(key, None)

        if kwargs:
            passthrough["extra"] = {
                key: mask_secret(value) if key in SECRET_FIELDS else value
                for key, value in kwargs.items()
            }
        return msg, passthrough


logger = Logger()
logger.debug(
    f"Logging level set to {logging.getLevelName(logger.logger.getEffectiveLevel())}"
)
