class EvaluationError(Exception):
    """Raised when a category evaluation fails."""


class EvaluationValidationError(EvaluationError):
    """Raised when the backend response does not match the result schema."""


class EvaluationNetworkError(EvaluationError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
