"""Pipeline request, outcome and event types."""

from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar, Union

from sentia.config.constants import Category, PipelineStage
from sentia.config.message import (
    CONFIDENCE_LABELS,
    ERROR_MESSAGES,
    NOT_RELEVANT_MESSAGES,
    PROGRESS_MESSAGES,
)
from sentia.exceptions import SentiaError
from sentia.infrastructure.http import ImageRef
from sentia.services.analysis.models import AnalysisResult

T = TypeVar("T")


@dataclass(frozen=True)
class AnalysisRequest:
    """One user capture: the image and optional GPS coordinates."""

    image: ImageRef = field(repr=False)
    location: Optional[dict[str, float]] = None
    capture_id: Optional[str] = None


# =============================================================================
# Outcomes
# =============================================================================


@dataclass(frozen=True)
class Completed:
    result: AnalysisResult
    category: Category

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": PipelineStage.COMPLETE.value,
            "category": self.category.value,
            "category_label": self.category.label,
            "confidence_label": CONFIDENCE_LABELS[self.result.confidence.value],
            "result": self.result.to_wire(),
        }


@dataclass(frozen=True)
class NotRelevant:
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": PipelineStage.NOT_RELEVANT.value,
            "reason": self.reason,
            **NOT_RELEVANT_MESSAGES,
        }


PipelineOutcome = Union[Completed, NotRelevant]


# =============================================================================
# Stage results
# =============================================================================


@dataclass(frozen=True)
class StageSuccess(Generic[T]):
    """A stage produced a value; ``degraded`` marks a fail-open/fail-soft substitute."""

    value: T
    degraded: bool = False


@dataclass(frozen=True)
class StageFailure:
    """A stage failed hard; the pipeline must stop with this error."""

    error: Exception


StageResult = Union[StageSuccess[T], StageFailure]


# =============================================================================
# Stream events
# =============================================================================


@dataclass(frozen=True)
class PipelineEvent:
    """A stage transition reported by ``AnalysisPipeline.process_stream``."""

    stage: PipelineStage
    outcome: Optional[PipelineOutcome] = None
    error: Optional[Exception] = None

    @property
    def is_terminal(self) -> bool:
        return self.stage.is_terminal

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"stage": self.stage.value}
        if self.stage.value in PROGRESS_MESSAGES:
            data["message"] = PROGRESS_MESSAGES[self.stage.value]
        if self.outcome is not None:
            data.update(self.outcome.to_dict())
        if self.error is not None:
            if isinstance(self.error, SentiaError):
                data["error"] = self.error.to_dict()
            else:
                data["error"] = {
                    "title": ERROR_MESSAGES["unknown_error"],
                    "detail": str(self.error),
                    "code": "INTERNAL_ERROR",
                }
        return data
