from collections.abc import Mapping
from dataclasses import dataclass, field

from atscore.evaluation.cv_parser import CvMetadata
from atscore.evaluation.models import CategoryResult, CategoryStatus, OverallStatus
from atscore.extraction.models import ExtractedText

MIME_PDF = "application/pdf"
MIME_PNG = "image/png"
MIME_JPEG = "image/jpeg"
MIME_TEXT = "text/plain"

SUPPORTED_MIME_TYPES = frozenset({MIME_PDF, MIME_PNG, MIME_JPEG, MIME_TEXT})


@dataclass(frozen=True)
class Document:
    """A validated submission, owned by a single pipeline run."""

    content: bytes = field(repr=False)
    mime_type: str
    size_bytes: int
    source_name: str


@dataclass(frozen=True)
class AnalysisReport:
    """Final output of one pipeline run.

    per_category holds every registered category exactly once, in the
    registry's canonical order. metadata holds the rule-based structure
    counts of the extracted text.
    """

    extracted_text: ExtractedText
    per_category: Mapping[str, CategoryResult]
    overall_score: int | None
    overall_status: OverallStatus
    metadata: CvMetadata | None = None

    @property
    def categories(self) -> tuple[str, ...]:
        return tuple(self.per_category)

    @property
    def errored_categories(self) -> tuple[str, ...]:
        return tuple(
            name for name, result in self.per_category.items() if result.is_error
        )

    def status_of(self, category: str) -> CategoryStatus:
        return self.per_category[category].status
