import asyncio
import threading

from atscore.config.settings import Settings
from atscore.criteria.registry import CriterionRegistry
from atscore.evaluation.factory import EvaluatorFactory
from atscore.extraction.extractor import TextExtractor
from atscore.extraction.factory import TextExtractorFactory
from atscore.logging.logger import Log
from atscore.processor.aggregator import Aggregator, StatusThresholds
from atscore.processor.document_loader import DocumentLoader
from atscore.processor.job_context import JobContextBuilder
from atscore.processor.models import AnalysisReport
from atscore.processor.orchestrator import EvaluationOrchestrator


class Processor:
    """Runs the full CV analysis pipeline for one submission.

    Pipeline: validate job context -> load -> extract -> evaluate -> aggregate.
    Any failure before evaluation propagates; evaluation failures are
    recorded inside the report.
    """

    def __init__(
        self,
        *,
        document_loader: DocumentLoader,
        job_context_builder: JobContextBuilder,
        text_extractor: TextExtractor,
        orchestrator: EvaluationOrchestrator,
    ) -> None:
        self._document_loader = document_loader
        self._job_context_builder = job_context_builder
        self._text_extractor = text_extractor
        self._orchestrator = orchestrator

    async def process(
        self,
        raw_bytes: bytes,
        mime_type: str,
        source_name: str,
        job_name: str | None = None,
        job_description: str | None = None,
    ) -> AnalysisReport:
        """Analyze one document and return the assembled report."""
        Log.info(f"Processing {source_name} ({mime_type})")

        # Step 1: Validate inputs
        job_context = self._job_context_builder.build(job_name, job_description)
        document = self._document_loader.load(raw_bytes, mime_type, source_name)
        Log.info(f"Loaded {document.size_bytes} bytes for {source_name}")

        # Step 2: Extract text off the event loop
        # A cancelled await cannot stop the worker thread; OCR polls stop between pages.
        stop = threading.Event()
        try:
            extracted_text = await asyncio.to_thread(
                self._text_extractor.extract, document, stop
            )
        except asyncio.CancelledError:
            stop.set()
            Log.info(f"Extraction of {source_name} cancelled")
            raise

        # Step 3: Evaluate all categories and aggregate
        return await self._orchestrator.run(extracted_text, job_context)


def build_processor(
    settings: Settings,
    registry: CriterionRegistry | None = None,
) -> Processor:
    """Build a Processor with all required adapters."""
    if registry is None:
        registry = CriterionRegistry.from_catalog()
    orchestrator = EvaluationOrchestrator(
        registry=registry,
        evaluator=EvaluatorFactory.create(settings, registry),
        aggregator=Aggregator(StatusThresholds.from_settings(settings)),
        timeout_seconds=settings.evaluation_timeout_seconds,
    )
    return Processor(
        document_loader=DocumentLoader(max_bytes=settings.max_upload_bytes),
        job_context_builder=JobContextBuilder(
            max_job_name_length=settings.max_job_name_length,
            max_job_description_length=settings.max_job_description_length,
        ),
        text_extractor=TextExtractorFactory.create(settings),
        orchestrator=orchestrator,
    )
