from dataclasses import dataclass
from typing import Literal

CategoryStatus = Literal["excellent", "good", "fair", "poor", "error"]
OverallStatus = CategoryStatus

STATUS_ERROR: CategoryStatus = "error"
SCORED_STATUSES = frozenset({"excellent", "good", "fair", "poor"})


@dataclass(frozen=True)
class JobContext:
    """Optional target job the CV is evaluated against."""

    job_name: str | None = None
    job_description: str | None = None

    @property
    def has_job_description(self) -> bool:
        return bool(self.job_description)


@dataclass(frozen=True)
class CategoryResult:
    """Outcome of evaluating one category.

    An error result keeps score 0 and is never averaged into the overall score.
    """

    category: str
    score: int
    status: CategoryStatus
    issues: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()

    @property
    def is_error(self) -> bool:
        return self.status == STATUS_ERROR

    @classmethod
    def error(
        cls,
        category: str,
        issue: str,
        recommendations: tuple[str, ...] = (),
    ) -> "CategoryResult":
        return cls(
            category=category,
            score=0,
            status=STATUS_ERROR,
            issues=(issue,),
            recommendations=recommendations,
        )
