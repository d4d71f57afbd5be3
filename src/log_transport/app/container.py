from __future__ import annotations

from dependency_injector import containers, providers

from .config import TransportConfig
from ..core.domain.levels import TimestampRenderer, default_level_palette
from ..core.formatters import DefaultFormatter, JsonFormatter, select_formatter
from ..core.services import PipelineDriver
from ..core.usecases.format import FormatUseCase
from ..core.usecases.stream import StreamUseCase
from ..infra.destination import open_destination
from ..infra.logging import TransportLogger
from ..shared.host import color_supported, current_username


def _resolve_colors(forced: bool | None) -> bool:
    return color_supported() if forced is None else forced


def _resolve_levels(overrides: dict[int, str] | None, colors: bool) -> dict[int, str]:
    palette = default_level_palette(colors)
    if overrides:
        palette.update({int(level): label for level, label in overrides.items()})
    return palette


class Container(containers.DeclarativeContainer):
    """DI container with Pydantic BaseSettings support."""

    # Configuration - supports Pydantic models
    config = providers.Configuration(pydantic_settings=[TransportConfig()])

    # Diagnostics logger (Resource: manages lifecycle with init/shutdown)
    logger = providers.Resource(
        TransportLogger,
        logger_name=config.logging.logger_name,
        level=config.logging.level,
        json_output=config.logging.json_output,
    )

    # Computed once per container
    username = providers.Singleton(current_username)
    colors = providers.Singleton(_resolve_colors, forced=config.formatter.color)

    levels = providers.Singleton(
        _resolve_levels,
        overrides=config.formatter.levels,
        colors=colors,
    )

    timestamps = providers.Singleton(
        TimestampRenderer,
        tz=config.formatter.timezone,
    )

    default_formatter = providers.Factory(
        DefaultFormatter,
        levels=levels,
        timestamps=timestamps,
        target_padding=config.formatter.target_padding,
        colors=colors,
        username=username,
    )

    json_formatter = providers.Factory(
        JsonFormatter,
        username=username,
    )

    # Override with providers.Object(instance) to inject a custom formatter
    formatter = providers.Singleton(
        select_formatter,
        transport=None,
        json=config.output.json_output,
        json_factory=json_formatter.provider,
        default_factory=default_formatter.provider,
    )

    destination = providers.Resource(
        open_destination,
        dest=config.output.dest,
        fsync=config.output.fsync,
    )

    pipeline = providers.Factory(
        PipelineDriver,
        formatter=formatter,
        destination=destination,
        logger=logger,
    )

    # Use cases
    stream_uc = providers.Factory(
        StreamUseCase,
        pipeline=pipeline,
        logger=logger,
    )

    format_uc = providers.Factory(
        FormatUseCase,
        formatter=formatter,
    )
