import json
from pathlib import Path
from typing import Any

from atscore.criteria.exceptions import RubricLoadError
from atscore.criteria.models import Rubric

_DEFAULT_CATALOG_PATH = Path(__file__).parent / "catalog.json"


def load_rubrics(catalog_path: Path | None = None) -> list[Rubric]:
    """Load rubric descriptors in catalog order.

    Args:
        catalog_path: Path to a catalog JSON file. Rubric file names inside
                      it are resolved relative to the catalog's ``rubrics``
                      directory. Defaults to the bundled catalog.json.

    Returns:
        Rubric descriptors in the order they appear in the catalog.

    Raises:
        RubricLoadError: if the catalog or any rubric file cannot be read
                         or is malformed.
    """
    if catalog_path is None:
        catalog_path = _DEFAULT_CATALOG_PATH
    try:
        catalog = json.loads(catalog_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise RubricLoadError(f"Failed to load rubric catalog: {exc}") from exc

    entries = catalog.get("categories") if isinstance(catalog, dict) else None
    if not isinstance(entries, list):
        raise RubricLoadError("Rubric catalog must contain a 'categories' list")

    rubric_dir = catalog_path.parent / "rubrics"
    return [_build_rubric(entry, index, rubric_dir) for index, entry in enumerate(entries)]


def _build_rubric(entry: Any, index: int, rubric_dir: Path) -> Rubric:
    if not isinstance(entry, dict):
        raise RubricLoadError(f"Catalog entry at index {index} must be an object")
    category = entry.get("category")
    if not category or not isinstance(category, str):
        raise RubricLoadError(
            f"Catalog entry at index {index}: 'category' must be a non-empty string"
        )
    rubric_file = entry.get("rubric")
    if not rubric_file or not isinstance(rubric_file, str):
        raise RubricLoadError(f"Category '{category}': 'rubric' file name is required")
    job_rubric_file = entry.get("job_rubric")
    if job_rubric_file is not None and not isinstance(job_rubric_file, str):
        raise RubricLoadError(f"Category '{category}': 'job_rubric' must be a string")
    requires_job_description = entry.get("requires_job_description", False)
    if not isinstance(requires_job_description, bool):
        raise RubricLoadError(
            f"Category '{category}': 'requires_job_description' must be a boolean"
        )
    return Rubric(
        category=category,
        rubric=_read_rubric(rubric_dir / rubric_file),
        job_rubric=_read_rubric(rubric_dir / job_rubric_file) if job_rubric_file else None,
        requires_job_description=requires_job_description,
    )


def _read_rubric(path: Path) -> str:
    try:
        text = path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise RubricLoadError(f"Failed to load rubric {path.name}: {exc}") from exc
    if not text:
        raise RubricLoadError(f"Rubric {path.name} is empty")
    return text
