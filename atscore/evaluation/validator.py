"""Validates a parsed backend response and builds a CategoryResult."""

from typing import Any

from atscore.evaluation.exceptions import EvaluationValidationError
from atscore.evaluation.models import SCORED_STATUSES, CategoryResult, CategoryStatus

_REQUIRED_FIELDS = ("score", "status", "issues", "recommendations")
_STATUS_ALIASES = {"needs-improvement": "fair", "needs improvement": "fair"}


def validate_and_build(data: dict[str, Any], category: str) -> CategoryResult:
    """Validate a backend response object for one category.

    Raises:
        EvaluationValidationError: on any schema violation.
    """
    _require_fields(data)
    return CategoryResult(
        category=category,
        score=_build_score(data["score"]),
        status=_build_status(data["status"]),
        issues=_build_string_list(data["issues"], "issues"),
        recommendations=_build_string_list(data["recommendations"], "recommendations"),
    )


def _require_fields(data: dict[str, Any]) -> None:
    missing = [name for name in _REQUIRED_FIELDS if name not in data]
    if missing:
        raise EvaluationValidationError(
            f"Missing required field(s): {', '.join(missing)}"
        )


def _build_score(raw: Any) -> int:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise EvaluationValidationError(f"'score' must be a number, got {raw!r}")
    if isinstance(raw, float):
        if not raw.is_integer():
            raise EvaluationValidationError(f"'score' must be an integer, got {raw!r}")
        raw = int(raw)
    if not 0 <= raw <= 100:
        raise EvaluationValidationError(f"'score' must be within [0, 100], got {raw}")
    return raw


def _build_status(raw: Any) -> CategoryStatus:
    if not isinstance(raw, str):
        raise EvaluationValidationError(f"'status' must be a string, got {raw!r}")
    token = raw.strip().lower()
    token = _STATUS_ALIASES.get(token, token)
    if token not in SCORED_STATUSES:
        raise EvaluationValidationError(
            f"'status' must be one of {sorted(SCORED_STATUSES)}, got {raw!r}"
        )
    return token  # type: ignore[return-value]


def _build_string_list(raw: Any, field: str) -> tuple[str, ...]:
    if not isinstance(raw, list):
        raise EvaluationValidationError(f"'{field}' must be a list")
    items: list[str] = []
    for i, item in enumerate(raw):
        if not isinstance(item, str):
            raise EvaluationValidationError(
                f"'{field}' item at index {i} must be a string, got {item!r}"
            )
        if item.strip():
            items.append(item.strip())
    return tuple(items)
