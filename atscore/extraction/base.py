import threading
from abc import ABC, abstractmethod
from typing import ClassVar

from atscore.extraction.models import OcrResult
from atscore.processor.models import Document


class BaseNativeExtractor(ABC):
    """Contract for adapters that read a document's embedded text."""

    @abstractmethod
    def extract(self, document: Document) -> str:
        """Extract plain text without any image analysis.

        Args:
            document: Validated document handle.

        Returns:
            Extracted text as a single string; empty if the document has
            no text layer.

        Raises:
            NativeExtractionError: if the backend cannot read the document.
        """


class BaseOcrEngine(ABC):
    """Contract for OCR adapters working on rendered page images."""

    SUPPORTED_MIME_TYPES: ClassVar[frozenset[str]] = frozenset()

    def supports(self, mime_type: str) -> bool:
        return mime_type in self.SUPPORTED_MIME_TYPES

    @abstractmethod
    def recognize(
        self, document: Document, stop_event: threading.Event | None = None
    ) -> OcrResult:
        """Recognize text on every page of the document.

        Args:
            document: Validated document handle.
            stop_event: Checked before each page; once set, recognition
                        stops with OcrError.

        Returns:
            OcrResult with the page texts joined and the mean word
            confidence normalized to [0, 1].

        Raises:
            OcrError: if rendering or recognition fails.
        """
