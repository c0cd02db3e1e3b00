from collections.abc import Mapping
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from atscore.config.settings import Settings
from atscore.evaluation.models import STATUS_ERROR, CategoryResult, OverallStatus


@dataclass(frozen=True)
class StatusThresholds:
    """Minimum overall score for each status; anything lower is "poor"."""

    excellent: int = 85
    good: int = 70
    fair: int = 50

    @classmethod
    def from_settings(cls, settings: Settings) -> "StatusThresholds":
        return cls(
            excellent=settings.status_excellent_min,
            good=settings.status_good_min,
            fair=settings.status_fair_min,
        )

    def status_for(self, score: int) -> OverallStatus:
        if score >= self.excellent:
            return "excellent"
        if score >= self.good:
            return "good"
        if score >= self.fair:
            return "fair"
        return "poor"


class Aggregator:
    """Combines per-category results into an overall score and status.

    Errored categories are left out of the mean; if nothing is left the
    overall score is None and the status is "error".
    """

    def __init__(self, thresholds: StatusThresholds | None = None) -> None:
        self._thresholds = thresholds if thresholds is not None else StatusThresholds()

    def aggregate(
        self, per_category: Mapping[str, CategoryResult]
    ) -> tuple[int | None, OverallStatus]:
        scores = [result.score for result in per_category.values() if not result.is_error]
        if not scores:
            return None, STATUS_ERROR
        mean = Decimal(sum(scores)) / Decimal(len(scores))
        overall = int(mean.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
        return overall, self._thresholds.status_for(overall)
