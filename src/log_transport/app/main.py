from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Mapping, Union

from dependency_injector import providers

from .config import TransportConfig
from .container import Container
from ..core.domain.models import LogRecord
from ..core.ports import Formatter
from ..core.services import PipelineDriver, PipelineStats
from ..core.services.pipeline import InputItem


def _create_container(
    config: TransportConfig | None = None,
    *,
    transport: Formatter | None = None,
    json: bool | None = None,
    dest: Union[int, str, Path, None] = None,
) -> Container:
    """Create a container, applying runtime overrides on top of the config.

    Args:
        config: Optional config. If None, loads from environment variables.
        transport: Explicit formatter instance (wins over ``json``)
        json: Override JSON mode
        dest: Override the destination

    Returns:
        Container instance (resources not yet initialized)
    """
    container = Container()

    if config is None:
        # Load from environment variables (BaseSettings default behavior)
        config = TransportConfig()

    if json is not None or dest is not None:
        output = config.output.model_copy(update={
            key: value
            for key, value in (("json_output", json), ("dest", str(dest) if isinstance(dest, Path) else dest))
            if value is not None
        })
        config = config.model_copy(update={"output": output})

    container.config.from_pydantic(config)

    if transport is not None:
        container.formatter.override(providers.Object(transport))

    return container


def transport(
    *,
    transport: Formatter | None = None,
    json: bool | None = None,
    dest: Union[int, str, Path, None] = None,
    config: TransportConfig | None = None,
) -> PipelineDriver:
    """Build a ready pipeline.

    The formatter is chosen once: an explicit ``transport`` instance, else
    JSON mode, else the human-readable formatter.

    Args:
        transport: Formatter instance to use as is
        json: Select the JSON formatter
        dest: File path or descriptor number (default: stdout)
        config: Optional config for testing. If None, loads from env vars.

    Returns:
        PipelineDriver whose ``feed``/``run`` write to the destination.
        Closing it (or leaving its ``with`` block) releases every resource.
    """
    container = _create_container(config, transport=transport, json=json, dest=dest)
    container.init_resources()
    return container.pipeline(on_close=container.shutdown_resources)


def run(
    lines: Iterable[InputItem],
    *,
    transport: Formatter | None = None,
    json: bool | None = None,
    dest: Union[int, str, Path, None] = None,
    config: TransportConfig | None = None,
) -> PipelineStats:
    """Stream ``lines`` to the destination and release every resource afterwards.

    Returns:
        Counters of formatted, passed-through and degraded lines

    Raises:
        DestinationWriteError: If the destination rejects a write
    """
    container = _create_container(config, transport=transport, json=json, dest=dest)
    container.init_resources()
    try:
        uc = container.stream_uc()
        return uc.execute(lines)
    finally:
        container.shutdown_resources()


def format_record(
    record: Union[LogRecord, Mapping[str, Any]],
    *,
    transport: Formatter | None = None,
    json: bool | None = None,
    config: TransportConfig | None = None,
) -> str:
    """Format a single record with the configured formatter.

    Returns:
        The formatted line, including its line separator
    """
    container = _create_container(config, transport=transport, json=json)
    uc = container.format_uc()
    return uc.execute(record)
