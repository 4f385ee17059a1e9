"""Analysis pipeline orchestrator."""

import logging
from collections.abc import AsyncGenerator

from sentia.config.constants import Category, PipelineStage
from sentia.exceptions import NetworkError, RequestTimeoutError, SentiaError
from sentia.infrastructure.http import TransportClient
from sentia.infrastructure.logging import StructuredLogger
from sentia.orchestrator.prompt_router import prompt_for
from sentia.orchestrator.state import (
    AnalysisRequest,
    Completed,
    NotRelevant,
    PipelineEvent,
    PipelineOutcome,
    StageFailure,
    StageResult,
    StageSuccess,
)
from sentia.orchestrator.step_timer import timed_stage
from sentia.services.analysis import AnalysisResult, CultureAnalyzer
from sentia.services.classification import CategoryClassifier, ClassificationResult
from sentia.services.relevance import RelevanceChecker, RelevanceResult

logger = logging.getLogger(__name__)


class AnalysisPipeline:
    """Sequences relevance check, classification and main analysis.

    Each stage has its own failure policy:

    - relevance fails open on network errors and timeouts
    - classification fails soft to ``unclear`` / ``low``
    - analysis fails hard on classified service errors and soft on anything else

    The pipeline holds no per-run state; callers guard against concurrent runs
    for the same capture.
    """

    def __init__(
        self,
        relevance: RelevanceChecker,
        classifier: CategoryClassifier,
        analyzer: CultureAnalyzer,
    ):
        self.relevance = relevance
        self.classifier = classifier
        self.analyzer = analyzer
        self.structured_logger = StructuredLogger(__name__)

    @classmethod
    def from_client(cls, client: TransportClient) -> "AnalysisPipeline":
        return cls(
            relevance=RelevanceChecker(client),
            classifier=CategoryClassifier(client),
            analyzer=CultureAnalyzer(client),
        )

    async def _step_relevance(self, request: AnalysisRequest) -> StageResult[RelevanceResult]:
        """Execute relevance check step."""
        async with timed_stage(PipelineStage.CHECKING_RELEVANCE, self.structured_logger) as stage:
            try:
                result = await self.relevance.check(request.image)
            except (NetworkError, RequestTimeoutError) as e:
                logger.warning(f"Relevance check unavailable ({e.error_code}), assuming relevant")
                stage.record(degraded=True, error_code=e.error_code)
                return StageSuccess(RelevanceResult.assumed_relevant(), degraded=True)
            except Exception as e:
                stage.record(failed=True, error_type=type(e).__name__)
                return StageFailure(e)
            stage.record(is_relevant=result.is_relevant)
            return StageSuccess(result)

    async def _step_classify(self, request: AnalysisRequest) -> StageResult[ClassificationResult]:
        """Execute category classification step. Never fails."""
        async with timed_stage(PipelineStage.CLASSIFYING, self.structured_logger) as stage:
            try:
                result = await self.classifier.classify(request.image)
            except Exception as e:
                logger.warning(f"Classification failed ({type(e).__name__}: {e}), using unclear")
                stage.record(degraded=True, error_type=type(e).__name__)
                return StageSuccess(ClassificationResult.unclear(), degraded=True)
            stage.record(category=result.category.value, confidence=result.confidence.value)
            return StageSuccess(result)

    async def _step_analyze(
        self,
        request: AnalysisRequest,
        category: Category,
    ) -> StageResult[AnalysisResult]:
        """Execute main analysis step."""
        async with timed_stage(PipelineStage.ANALYZING, self.structured_logger) as stage:
            prompt = prompt_for(category, request.location)
            try:
                result = await self.analyzer.analyze(
                    request.image, category, prompt, request.location
                )
            except SentiaError as e:
                stage.record(failed=True, error_code=e.error_code)
                return StageFailure(e)
            except Exception as e:
                logger.warning(
                    f"Analysis response unusable ({type(e).__name__}: {e}), returning fallback"
                )
                stage.record(degraded=True, error_type=type(e).__name__)
                return StageSuccess(AnalysisResult.unavailable(category), degraded=True)
            stage.record(category=result.category.value, confidence=result.confidence.value)
            return StageSuccess(result)

    async def process_stream(
        self, request: AnalysisRequest
    ) -> AsyncGenerator[PipelineEvent, None]:
        """
        Run the pipeline, yielding one event per stage transition.

        Each progress event is yielded before its remote call. The stream ends
        with exactly one terminal event: ``complete``, ``not_relevant`` or
        ``error``.

        Args:
            request: Image and optional location

        Yields:
            PipelineEvent
        """
        try:
            # Stage 1: RELEVANCE
            yield PipelineEvent(PipelineStage.CHECKING_RELEVANCE)
            relevance = await self._step_relevance(request)
            if isinstance(relevance, StageFailure):
                yield PipelineEvent(PipelineStage.ERROR, error=relevance.error)
                return
            if not relevance.value.is_relevant:
                logger.info(f"Image not relevant: {relevance.value.reason}")
                yield PipelineEvent(
                    PipelineStage.NOT_RELEVANT,
                    outcome=NotRelevant(reason=relevance.value.reason),
                )
                return

            # Stage 2: CLASSIFICATION
            yield PipelineEvent(PipelineStage.CLASSIFYING)
            classification = await self._step_classify(request)
            category = classification.value.category

            # Stage 3: ANALYSIS
            yield PipelineEvent(PipelineStage.ANALYZING)
            analysis = await self._step_analyze(request, category)
            if isinstance(analysis, StageFailure):
                yield PipelineEvent(PipelineStage.ERROR, error=analysis.error)
                return

            yield PipelineEvent(
                PipelineStage.COMPLETE,
                outcome=Completed(result=analysis.value, category=category),
            )

        except Exception as e:
            logger.error(f"Pipeline error: {e}", exc_info=True)
            yield PipelineEvent(PipelineStage.ERROR, error=e)

    async def process(self, request: AnalysisRequest) -> PipelineOutcome:
        """
        Run the pipeline to completion.

        Returns:
            Completed or NotRelevant

        Raises:
            Exception: The hard failure that ended the run
        """
        async for event in self.process_stream(request):
            if event.stage is PipelineStage.ERROR:
                raise event.error
            if event.outcome is not None:
                return event.outcome
        raise RuntimeError("Pipeline stream ended without a terminal event")

    async def reanalyze(self, request: AnalysisRequest, category: Category) -> Completed:
        """Re-run only the main analysis with a category chosen by the user."""
        category = Category.coerce(category)
        analysis = await self._step_analyze(request, category)
        if isinstance(analysis, StageFailure):
            raise analysis.error
        return Completed(result=analysis.value, category=category)
