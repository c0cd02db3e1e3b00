import asyncio
from types import MappingProxyType

from atscore.criteria.registry import CriterionRegistry
from atscore.evaluation.base import BaseCriterionEvaluator
from atscore.evaluation.cv_parser import parse_cv
from atscore.evaluation.models import CategoryResult, JobContext
from atscore.extraction.models import ExtractedText
from atscore.logging.logger import Log
from atscore.processor.aggregator import Aggregator
from atscore.processor.exceptions import EmptyRegistryError
from atscore.processor.models import AnalysisReport

TIMEOUT_ISSUE = "Evaluation timed out"


class EvaluationOrchestrator:
    """Runs every registered category concurrently and assembles the report.

    Each evaluation has its own timeout. Timeouts and evaluator exceptions
    become error results; only an empty registry aborts the run. Cancelling
    run() cancels all in-flight evaluations.
    """

    def __init__(
        self,
        *,
        registry: CriterionRegistry,
        evaluator: BaseCriterionEvaluator,
        aggregator: Aggregator,
        timeout_seconds: float,
    ) -> None:
        self._registry = registry
        self._evaluator = evaluator
        self._aggregator = aggregator
        self._timeout_seconds = timeout_seconds

    async def run(
        self,
        extracted_text: ExtractedText,
        job_context: JobContext | None = None,
    ) -> AnalysisReport:
        categories = self._registry.list_categories()
        if not categories:
            raise EmptyRegistryError("No evaluation categories are registered")

        Log.info(f"Evaluating {len(categories)} categories concurrently")
        results = await asyncio.gather(
            *(self._evaluate(category, extracted_text, job_context) for category in categories)
        )
        per_category = MappingProxyType(dict(zip(categories, results)))

        overall_score, overall_status = self._aggregator.aggregate(per_category)
        errored = sum(1 for result in results if result.is_error)
        Log.info(
            f"Overall score {overall_score} ({overall_status}), "
            f"{errored}/{len(categories)} categories errored"
        )
        return AnalysisReport(
            extracted_text=extracted_text,
            per_category=per_category,
            overall_score=overall_score,
            overall_status=overall_status,
            metadata=parse_cv(extracted_text.text).metadata,
        )

    async def _evaluate(
        self,
        category: str,
        extracted_text: ExtractedText,
        job_context: JobContext | None,
    ) -> CategoryResult:
        try:
            return await asyncio.wait_for(
                self._evaluator.evaluate(category, extracted_text, job_context),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError:
            Log.warning(f"Evaluation of '{category}' timed out after {self._timeout_seconds}s")
            return CategoryResult.error(category, TIMEOUT_ISSUE)
        except Exception as exc:
            Log.error(f"Evaluator crashed on '{category}': {exc}")
            return CategoryResult.error(category, f"Evaluation failed: {exc}")
