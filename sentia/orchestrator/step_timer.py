"""Async context manager for timing and logging pipeline stages."""

import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sentia.config.constants import PipelineStage, log_pipeline_stage
from sentia.infrastructure.logging import StructuredLogger


class StageContext:
    """Mutable context for a timed pipeline stage."""

    def __init__(self) -> None:
        self.summary: dict[str, Any] = {}

    def record(self, **summary: Any) -> None:
        self.summary.update(summary)


@asynccontextmanager
async def timed_stage(
    stage: PipelineStage,
    structured_logger: StructuredLogger,
) -> AsyncGenerator[StageContext, None]:
    """Time a pipeline stage and log its summary."""
    log_pipeline_stage(stage)
    ctx = StageContext()
    start = time.time()
    try:
        yield ctx
    except Exception as e:
        structured_logger.log_error(stage.value, e, ctx.summary or None)
        raise
    elapsed_ms = (time.time() - start) * 1000
    structured_logger.log_step(stage.value, ctx.summary, duration_ms=elapsed_ms)
