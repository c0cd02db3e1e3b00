from abc import ABC, abstractmethod

from atscore.evaluation.models import CategoryResult, JobContext
from atscore.extraction.models import ExtractedText


class BaseCriterionEvaluator(ABC):
    """Contract for all category evaluators."""

    @abstractmethod
    async def evaluate(
        self,
        category: str,
        extracted_text: ExtractedText,
        job_context: JobContext | None = None,
    ) -> CategoryResult:
        """Evaluate one category of the CV.

        Args:
            category: A category registered in the CriterionRegistry.
            extracted_text: Text obtained from the submitted document.
            job_context: Optional target job; evaluators must degrade
                         gracefully when it is absent.

        Returns:
            CategoryResult; backend faults are reported as status "error"
            rather than raised.
        """
