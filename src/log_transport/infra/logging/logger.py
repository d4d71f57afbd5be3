from __future__ import annotations

import logging
from typing import Any

from dependency_injector.resources import Resource

from .handlers import build_json_console_handler, build_human_console_handler


class TransportLogger(Resource):
    """Diagnostics logger for the transport itself.

    Provides convenience methods that attach keyword arguments as structured
    fields. Writes to stderr only, as text or JSON.
    """

    def init(
        self,
        *,
        logger_name: str = "log_transport",
        level: str = "WARNING",
        json_output: bool = False,
    ) -> "TransportLogger":
        """Initialize the logger and its single console handler.

        Args:
            logger_name: Logger name
            level: Logging level (DEBUG, INFO, WARNING, ERROR)
            json_output: Emit diagnostics as JSON instead of text

        Returns:
            Self for dependency_injector Resource pattern
        """
        numeric_level = logging.getLevelName(level.upper())
        if not isinstance(numeric_level, int):
            numeric_level = logging.WARNING

        self._logger = logging.getLogger(logger_name)
        self._logger.setLevel(numeric_level)
        self._logger.propagate = False

        self._logger.handlers.clear()
        if json_output:
            handler = build_json_console_handler(level=numeric_level)
        else:
            handler = build_human_console_handler(level=numeric_level)
        self._logger.addHandler(handler)
        self._handlers = [handler]

        return self

    def shutdown(self, resource: "TransportLogger") -> None:
        """Flush and detach the handlers."""
        for handler in self._handlers:
            handler.flush()
            handler.close()

        self._logger.handlers.clear()

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message with optional extra fields."""
        if kwargs:
            self._logger.debug(message, extra=kwargs)
        else:
            self._logger.debug(message)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message with optional extra fields."""
        if kwargs:
            self._logger.info(message, extra=kwargs)
        else:
            self._logger.info(message)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message with optional extra fields."""
        if kwargs:
            self._logger.warning(message, extra=kwargs)
        else:
            self._logger.warning(message)

    def error(self, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        """Log error message with optional extra fields and exception info."""
        if kwargs:
            self._logger.error(message, extra=kwargs, exc_info=exc_info)
        else:
            self._logger.error(message, exc_info=exc_info)
