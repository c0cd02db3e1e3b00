from collections.abc import Iterable
from pathlib import Path
from types import MappingProxyType

from atscore.criteria.exceptions import RubricLoadError, UnknownCategoryError
from atscore.criteria.models import Rubric
from atscore.criteria.rubric_loader import load_rubrics


class CriterionRegistry:
    """Read-only catalog of evaluation categories.

    The order rubrics are given in is the canonical order used for fan-out
    and for rendering reports.
    """

    def __init__(self, rubrics: Iterable[Rubric]) -> None:
        ordered: dict[str, Rubric] = {}
        for rubric in rubrics:
            if rubric.category in ordered:
                raise RubricLoadError(f"Duplicate category '{rubric.category}'")
            ordered[rubric.category] = rubric
        self._rubrics = MappingProxyType(ordered)
        self._categories = tuple(ordered)

    @classmethod
    def from_catalog(cls, catalog_path: Path | None = None) -> "CriterionRegistry":
        return cls(load_rubrics(catalog_path))

    def list_categories(self) -> tuple[str, ...]:
        return self._categories

    def get(self, category: str) -> Rubric:
        try:
            return self._rubrics[category]
        except KeyError:
            raise UnknownCategoryError(f"Unknown category '{category}'") from None

    def __contains__(self, category: object) -> bool:
        return category in self._rubrics

    def __len__(self) -> int:
        return len(self._categories)
