from __future__ import annotations

from .pipeline import PipelineDriver, PipelineStats

__all__ = [
    "PipelineDriver",
    "PipelineStats",
]
