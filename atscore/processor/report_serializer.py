from dataclasses import asdict

from atscore.evaluation.models import CategoryResult
from atscore.extraction.models import ExtractedText
from atscore.processor.models import AnalysisReport


class ReportSerializer:
    """Converts an AnalysisReport to a JSON-serializable structure."""

    def __init__(self, include_text: bool = False) -> None:
        self._include_text = include_text

    def serialize(self, report: AnalysisReport) -> dict[str, object]:
        """Transform an AnalysisReport into a JSON-ready dict.

        Returns:
            Dict with 'categories' listing category names in registry order
            (JSON object key order is not relied upon) and 'per_category'
            keyed by category name.
        """
        payload: dict[str, object] = {
            "overall_score": report.overall_score,
            "overall_status": report.overall_status,
            "categories": list(report.categories),
            "per_category": {
                name: self._result_to_dict(result)
                for name, result in report.per_category.items()
            },
            "extracted_text": self._extracted_text_to_dict(report.extracted_text),
        }
        if report.metadata is not None:
            payload["metadata"] = asdict(report.metadata)
        return payload

    def _result_to_dict(self, result: CategoryResult) -> dict[str, object]:
        return {
            "category": result.category,
            "score": None if result.is_error else result.score,
            "status": result.status,
            "issues": list(result.issues),
            "recommendations": list(result.recommendations),
        }

    def _extracted_text_to_dict(self, extracted: ExtractedText) -> dict[str, object]:
        payload: dict[str, object] = {
            "method": extracted.method,
            "confidence": round(extracted.confidence, 4),
            "length": extracted.length,
        }
        if self._include_text:
            payload["text"] = extracted.text
        return payload
