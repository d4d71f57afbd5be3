from .app.main import transport, run, format_record
from .core.domain.models import (
    LogRecord,
    SerializedError,
    SerializedRequest,
    SerializedResponse,
    StackFrame,
    original_error,
)
from .core.formatters import DefaultFormatter, Formatter, JsonFormatter, select_formatter
from .core.serializers import (
    create_error_serializer,
    create_serializers,
    serialize_error,
    serialize_request,
    serialize_response,
)
from .core.services import PipelineDriver, PipelineStats

__all__ = [
    "transport",
    "run",
    "format_record",
    "LogRecord",
    "SerializedError",
    "SerializedRequest",
    "SerializedResponse",
    "StackFrame",
    "original_error",
    "DefaultFormatter",
    "Formatter",
    "JsonFormatter",
    "select_formatter",
    "create_error_serializer",
    "create_serializers",
    "serialize_error",
    "serialize_request",
    "serialize_response",
    "PipelineDriver",
    "PipelineStats",
]

# stdlib logging defaults: attach NullHandler to prevent 'No handler' warnings
import logging
_logger = logging.getLogger(__name__)
_logger.addHandler(logging.NullHandler())
