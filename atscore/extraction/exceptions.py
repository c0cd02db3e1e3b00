class ExtractionError(Exception):
    """Base exception for text extraction."""


class NativeExtractionError(ExtractionError):
    """Raised when a native text backend cannot read the document."""


class OcrError(ExtractionError):
    """Raised when the OCR backend cannot recognize the document."""


class ExtractionFailedError(ExtractionError):
    """Raised when no usable text could be obtained by any strategy."""
