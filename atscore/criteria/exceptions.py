class CriteriaError(Exception):
    """Base exception for the criterion catalog."""


class RubricLoadError(CriteriaError):
    """Raised when the catalog or a rubric file cannot be loaded."""


class UnknownCategoryError(CriteriaError, KeyError):
    """Raised when a category is not present in the registry."""
