class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class InputValidationError(ProcessorError):
    """Raised when a submission is rejected before any processing starts."""


class UnsupportedFormatError(InputValidationError):
    """Raised when the declared MIME type is not one the pipeline accepts."""


class PayloadTooLargeError(InputValidationError):
    """Raised when the document exceeds the configured size ceiling."""


class EmptyDocumentError(InputValidationError):
    """Raised when the submitted document has no content at all."""


class InvalidJobContextError(InputValidationError):
    """Raised when the job name or job description fails validation."""


class EmptyRegistryError(ProcessorError):
    """Raised when no evaluation categories are registered."""
