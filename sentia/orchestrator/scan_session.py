"""Scan coordination around the analysis pipeline.

The coordinator is the layer that turns a pipeline run into a user scan:
it refuses a second run for a capture already in flight, reserves one of the
day's free scans before the pipeline starts and gives it back when the scan
ends without a result. After a completed analysis it saves history, starts
nearby discovery in the background and optionally autoplays the audio guide.
"""

import asyncio
import logging
import uuid
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Optional

from sentia.config.constants import Category, Feature, PipelineStage
from sentia.exceptions import PipelineBusyError, QuotaExceededError
from sentia.orchestrator.context import AppContext
from sentia.orchestrator.state import AnalysisRequest, Completed, PipelineEvent, PipelineOutcome
from sentia.services.access import PaywallData
from sentia.services.audio import AudioPlayer, autoplay_audio_guide
from sentia.services.discovery import NearbyResponse
from sentia.services.history import ScanRecord
from sentia.services.quota import QuotaReservation, QuotaStatus

logger = logging.getLogger(__name__)


class ScanReport:
    """Everything a caller needs after a scan finished."""

    def __init__(
        self,
        capture_id: str,
        outcome: Optional[PipelineOutcome] = None,
        error: Optional[Exception] = None,
        quota: Optional[QuotaStatus] = None,
        record: Optional[ScanRecord] = None,
        nearby_task: Optional["asyncio.Task[NearbyResponse]"] = None,
        nearby_paywall: Optional[PaywallData] = None,
        autoplayed: bool = False,
    ):
        self.capture_id = capture_id
        self.outcome = outcome
        self.error = error
        self.quota = quota
        self.record = record
        self.nearby_task = nearby_task
        self.nearby_paywall = nearby_paywall
        self.autoplayed = autoplayed

    @property
    def completed(self) -> bool:
        return isinstance(self.outcome, Completed)

    async def nearby(self) -> NearbyResponse:
        """Wait for nearby discovery. Never raises; failures give an empty list."""
        if self.nearby_task is None:
            return NearbyResponse.empty()
        try:
            return await self.nearby_task
        except Exception as e:
            logger.warning(f"Nearby discovery task failed: {e}")
            return NearbyResponse.empty()
        except asyncio.CancelledError:
            if self.nearby_task.cancelled():
                return NearbyResponse.empty()
            raise


class ScanSession:
    """A single guarded scan; iterate ``events()`` once."""

    def __init__(
        self,
        coordinator: "ScanCoordinator",
        request: AnalysisRequest,
        capture_id: str,
        unlimited: bool,
        reservation: Optional[QuotaReservation] = None,
    ):
        self._coordinator = coordinator
        self.request = request
        self.capture_id = capture_id
        self.unlimited = unlimited
        self.reservation = reservation
        self.report: Optional[ScanReport] = None

    async def events(self) -> AsyncGenerator[PipelineEvent, None]:
        """Stream pipeline events; post-completion work runs before the terminal event."""
        async for event in self._coordinator.ctx.pipeline.process_stream(self.request):
            if event.is_terminal:
                self.report = await self._coordinator._finish(self, event)
            yield event


class ScanCoordinator:
    """Runs scans against the shared application context."""

    def __init__(self, ctx: AppContext, audio_player: Optional[AudioPlayer] = None):
        self.ctx = ctx
        self.audio_player = audio_player
        self._active_captures: set[str] = set()
        self._nearby_tasks: set[asyncio.Task] = set()

    def is_active(self, capture_id: str) -> bool:
        return capture_id in self._active_captures

    async def check_quota(self) -> tuple[QuotaStatus, bool]:
        """Return the quota status and whether the user scans without limit."""
        unlimited = await self.ctx.gate.is_premium()
        return await self.ctx.quota.can_scan(unlimited), unlimited

    @asynccontextmanager
    async def session(self, request: AnalysisRequest) -> AsyncGenerator[ScanSession, None]:
        """
        Open a guarded scan for ``request``.

        Raises:
            PipelineBusyError: A scan for the same capture is already running
            QuotaExceededError: The free daily quota is used up
        """
        capture_id = request.capture_id or uuid.uuid4().hex
        if capture_id in self._active_captures:
            raise PipelineBusyError(capture_id)
        self._active_captures.add(capture_id)
        session: Optional[ScanSession] = None
        try:
            unlimited = await self.ctx.gate.is_premium()
            reservation = None
            if not unlimited:
                reservation = await self.ctx.quota.try_reserve()
                if not reservation.granted:
                    status = reservation.status
                    paywall = self.ctx.gate.get_paywall_data(Feature.UNLIMITED_SCANS)
                    logger.info(f"Scan refused, daily limit reached ({status.used}/{status.limit})")
                    raise QuotaExceededError(status.used, status.limit, paywall=paywall.to_wire())
            session = ScanSession(self, request, capture_id, unlimited, reservation)
            yield session
        finally:
            self._active_captures.discard(capture_id)
            if session is not None and session.reservation is not None:
                if session.report is None or not session.report.completed:
                    await self.ctx.quota.release(session.reservation)

    async def scan(self, request: AnalysisRequest) -> ScanReport:
        """Run a full scan and return its report, raising the pipeline's hard failure."""
        async with self.session(request) as session:
            async for _event in session.events():
                pass
        report = session.report
        if report is None:
            raise RuntimeError("Scan ended without a terminal event")
        if report.error is not None:
            raise report.error
        return report

    async def reanalyze(self, request: AnalysisRequest, category: Category) -> Completed:
        """Analyze again with a user-chosen category. Not billed against the quota."""
        return await self.ctx.pipeline.reanalyze(request, category)

    async def _finish(self, session: ScanSession, event: PipelineEvent) -> ScanReport:
        if event.stage is PipelineStage.ERROR:
            return ScanReport(session.capture_id, error=event.error)
        if not isinstance(event.outcome, Completed):
            return ScanReport(session.capture_id, outcome=event.outcome)

        outcome = event.outcome
        quota, _ = await self.check_quota()

        record = await self.ctx.history.add(
            ScanRecord(
                category=outcome.category,
                analysis=outcome.result,
                location=session.request.location,
            )
        )

        report = ScanReport(session.capture_id, outcome=outcome, quota=quota, record=record)

        nearby_access = await self.ctx.gate.can_access(Feature.NEARBY_DISCOVERY)
        if nearby_access.can_access:
            report.nearby_task = self._start_nearby(session.request, outcome, record.id)
        else:
            report.nearby_paywall = self.ctx.gate.get_paywall_data(Feature.NEARBY_DISCOVERY)

        if self.audio_player is not None:
            report.autoplayed = await self._autoplay(outcome)
        return report

    def _start_nearby(
        self,
        request: AnalysisRequest,
        outcome: Completed,
        scan_id: str,
    ) -> "asyncio.Task[NearbyResponse]":
        task = asyncio.create_task(self._fetch_nearby(request, outcome.category, scan_id))
        self._nearby_tasks.add(task)
        task.add_done_callback(self._nearby_tasks.discard)
        return task

    async def _fetch_nearby(
        self,
        request: AnalysisRequest,
        category: Category,
        scan_id: str,
    ) -> NearbyResponse:
        response = await self.ctx.discovery.get_nearby(request.location, category)
        if response.has_suggestions:
            await self.ctx.history.attach_nearby(scan_id, response.suggestions)
        return response

    async def _autoplay(self, outcome: Completed) -> bool:
        try:
            return await autoplay_audio_guide(self.ctx.gate, self.audio_player, outcome.result)
        except Exception as e:
            logger.warning(f"Audio guide autoplay failed: {e}", exc_info=True)
            return False

    async def close(self) -> None:
        """Cancel nearby discovery still running."""
        for task in list(self._nearby_tasks):
            task.cancel()
        if self._nearby_tasks:
            await asyncio.gather(*self._nearby_tasks, return_exceptions=True)
        self._nearby_tasks.clear()
