"""Two-tier text extraction: native text layer first, OCR as fallback."""

import re
import threading
from collections.abc import Mapping

from atscore.extraction.base import BaseNativeExtractor, BaseOcrEngine
from atscore.extraction.exceptions import ExtractionFailedError, NativeExtractionError, OcrError
from atscore.extraction.models import ExtractedText
from atscore.logging.logger import Log
from atscore.processor.models import Document

_TRAILING_SPACE = re.compile(r"[ \t\f\v]+\n")
_EXCESS_NEWLINES = re.compile(r"\n{3,}")


def normalize_text(text: str) -> str:
    """Unify line endings, drop trailing blanks and collapse blank-line runs."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _TRAILING_SPACE.sub("\n", text)
    return _EXCESS_NEWLINES.sub("\n\n", text).strip()


class TextExtractor:
    """Turns a Document into ExtractedText.

    Native extraction is attempted for every document. OCR runs only when
    the native result is shorter than min_native_text_length and the OCR
    engine can handle the document type.
    """

    NATIVE_CONFIDENCE = 1.0

    def __init__(
        self,
        *,
        native_extractors: Mapping[str, BaseNativeExtractor],
        ocr_engine: BaseOcrEngine,
        min_native_text_length: int,
    ) -> None:
        self._native_extractors = dict(native_extractors)
        self._ocr_engine = ocr_engine
        self._min_native_text_length = min_native_text_length

    def extract(
        self, document: Document, stop_event: threading.Event | None = None
    ) -> ExtractedText:
        native_text = self._extract_native(document)
        if len(native_text) >= self._min_native_text_length:
            Log.info(
                f"Extracted {len(native_text)} chars from {document.source_name} (native)"
            )
            return ExtractedText(
                text=native_text, method="native", confidence=self.NATIVE_CONFIDENCE
            )

        if not self._ocr_engine.supports(document.mime_type):
            if native_text:
                Log.info(
                    f"Extracted {len(native_text)} chars from {document.source_name} "
                    f"(native, below threshold, OCR not applicable)"
                )
                return ExtractedText(
                    text=native_text, method="native", confidence=self.NATIVE_CONFIDENCE
                )
            raise ExtractionFailedError(
                f"No text could be extracted from {document.source_name}"
            )

        Log.info(
            f"Native extraction yielded {len(native_text)} chars from "
            f"{document.source_name}, falling back to OCR"
        )
        return self._extract_ocr(document, stop_event)

    def _extract_native(self, document: Document) -> str:
        extractor = self._native_extractors.get(document.mime_type)
        if extractor is None:
            Log.debug(f"No native text layer for '{document.mime_type}'")
            return ""
        try:
            return normalize_text(extractor.extract(document))
        except NativeExtractionError as exc:
            Log.warning(f"Native extraction failed, treating as empty: {exc}")
            return ""

    def _extract_ocr(
        self, document: Document, stop_event: threading.Event | None
    ) -> ExtractedText:
        try:
            result = self._ocr_engine.recognize(document, stop_event)
        except OcrError as exc:
            raise ExtractionFailedError(
                f"No text could be extracted from {document.source_name}: {exc}"
            ) from exc

        text = normalize_text(result.text)
        if not text:
            raise ExtractionFailedError(
                f"OCR found no text in {document.source_name}"
            )
        Log.info(
            f"Extracted {len(text)} chars from {document.source_name} "
            f"(ocr, confidence {result.confidence:.2f})"
        )
        return ExtractedText(text=text, method="ocr", confidence=result.confidence)
