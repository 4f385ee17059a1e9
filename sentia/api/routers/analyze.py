"""Analysis endpoints."""

import json
import logging
from collections.abc import AsyncIterator
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from sentia.api.dependencies import get_scan_coordinator
from sentia.api.models import AnalyzeRequest, AnalyzeResponse, ReanalyzeRequest
from sentia.config.constants import Feature, PipelineStage
from sentia.exceptions import PipelineBusyError, QuotaExceededError, SentiaError
from sentia.orchestrator.scan_session import ScanCoordinator, ScanReport
from sentia.orchestrator.state import Completed, NotRelevant
from sentia.services.discovery import group_suggestions

logger = logging.getLogger(__name__)

router = APIRouter()

NEARBY_EVENT = "nearby"


def _sse(data: dict[str, Any]) -> str:
    return f"data: {json.dumps(data, ensure_ascii=False, default=str)}\n\n"


async def _ensure_can_start(coordinator: ScanCoordinator, capture_id: str | None) -> None:
    """Reject up front so the stream endpoint can answer with a proper status."""
    if capture_id and coordinator.is_active(capture_id):
        raise PipelineBusyError(capture_id)
    status, _ = await coordinator.check_quota()
    if not status.can_scan:
        paywall = coordinator.ctx.gate.get_paywall_data(Feature.UNLIMITED_SCANS)
        raise QuotaExceededError(status.used, status.limit, paywall=paywall.to_wire())


def _report_response(report: ScanReport, quota: dict[str, Any]) -> dict[str, Any]:
    outcome = report.outcome
    response: dict[str, Any] = {"quota": quota}
    if isinstance(outcome, Completed):
        response.update(outcome.to_dict())
        response["scan_id"] = report.record.id if report.record else None
        if report.nearby_paywall is not None:
            response["nearby_paywall"] = report.nearby_paywall.to_wire()
    elif isinstance(outcome, NotRelevant):
        response.update(outcome.to_dict())
    return response


@router.post("/analyze", response_model=AnalyzeResponse, response_model_exclude_none=True)
async def analyze(
    request: AnalyzeRequest,
    coordinator: ScanCoordinator = Depends(get_scan_coordinator),  # noqa: B008
) -> dict[str, Any]:
    """
    Analyze a photo.

    Runs relevance check, classification and the category-specific analysis.
    Nearby discovery continues in the background and is saved to history.
    """
    report = await coordinator.scan(request.to_analysis_request())
    quota = report.quota or (await coordinator.check_quota())[0]
    return _report_response(report, quota.to_wire())


@router.post("/analyze/reanalyze")
async def reanalyze(
    request: ReanalyzeRequest,
    coordinator: ScanCoordinator = Depends(get_scan_coordinator),  # noqa: B008
) -> dict[str, Any]:
    """Analyze again with a category chosen by the user."""
    completed = await coordinator.reanalyze(request.to_analysis_request(), request.category)
    return completed.to_dict()


@router.post(
    "/analyze/stream",
    response_class=StreamingResponse,
    responses={
        200: {
            "description": "Server-Sent Events stream",
            "content": {
                "text/event-stream": {
                    "schema": {
                        "type": "string",
                        "example": 'data: {"stage": "checking_relevance", "message": "Checking image..."}\n\n',
                    }
                }
            },
        }
    },
)
async def analyze_stream(
    request: AnalyzeRequest,
    coordinator: ScanCoordinator = Depends(get_scan_coordinator),  # noqa: B008
) -> StreamingResponse:
    """Stream stage transitions as Server-Sent Events.

    One event per stage, ending with ``complete``, ``not_relevant`` or
    ``error``. After ``complete`` a final ``nearby`` event carries the
    discovery suggestions (or the paywall when the feature is locked).
    """
    analysis_request = request.to_analysis_request()
    await _ensure_can_start(coordinator, analysis_request.capture_id)

    async def generate() -> AsyncIterator[str]:
        try:
            async with coordinator.session(analysis_request) as session:
                async for event in session.events():
                    data = event.to_dict()
                    if event.stage is PipelineStage.COMPLETE and session.report is not None:
                        if session.report.quota is not None:
                            data["quota"] = session.report.quota.to_wire()
                        if session.report.record is not None:
                            data["scan_id"] = session.report.record.id
                    yield _sse(data)

            report = session.report
            if report is not None and report.completed:
                nearby = await report.nearby()
                payload: dict[str, Any] = {
                    "stage": NEARBY_EVENT,
                    "suggestions": [s.to_wire() for s in nearby.suggestions],
                    "groups": {
                        group: [s.to_wire() for s in items]
                        for group, items in group_suggestions(nearby.suggestions).items()
                    },
                }
                if report.nearby_paywall is not None:
                    payload["paywall"] = report.nearby_paywall.to_wire()
                yield _sse(payload)
        except SentiaError as e:
            logger.warning(f"Analysis stream refused: {e.message}")
            yield _sse({"stage": PipelineStage.ERROR.value, "error": e.to_dict()})

    return StreamingResponse(
        generate(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
