"""OCR adapter backed by the Tesseract engine.

PDF pages are rasterized with PyMuPDF at the configured DPI; PNG and JPEG
uploads are recognized as-is. Word boxes from ``image_to_data`` are joined
back into lines, and the mean word confidence of all pages becomes the
result confidence.
"""

import io
import threading
from collections.abc import Iterator
from typing import Any, ClassVar

import pymupdf
import pytesseract
from PIL import Image

from atscore.extraction.base import BaseOcrEngine
from atscore.extraction.exceptions import OcrError
from atscore.extraction.models import OcrResult
from atscore.logging.logger import Log
from atscore.processor.models import MIME_JPEG, MIME_PDF, MIME_PNG, Document


class TesseractAdapter(BaseOcrEngine):
    """Recognizes text on rendered page images with pytesseract."""

    SUPPORTED_MIME_TYPES: ClassVar[frozenset[str]] = frozenset({MIME_PDF, MIME_PNG, MIME_JPEG})

    def __init__(self, language: str = "eng", dpi: int = 300) -> None:
        self._language = language
        self._dpi = dpi

    def recognize(
        self, document: Document, stop_event: threading.Event | None = None
    ) -> OcrResult:
        if not self.supports(document.mime_type):
            raise OcrError(f"OCR does not support '{document.mime_type}'")
        try:
            page_texts: list[str] = []
            confidences: list[float] = []
            for page_number, image in enumerate(self._render_pages(document), start=1):
                if stop_event is not None and stop_event.is_set():
                    raise OcrError(f"OCR cancelled for {document.source_name}")
                data = pytesseract.image_to_data(
                    image,
                    lang=self._language,
                    output_type=pytesseract.Output.DICT,
                )
                text, word_confidences = self._collect_words(data)
                Log.debug(
                    f"OCR page {page_number} of {document.source_name}: "
                    f"{len(word_confidences)} words"
                )
                page_texts.append(text)
                confidences.extend(word_confidences)
        except OcrError:
            raise
        except Exception as exc:
            raise OcrError(
                f"tesseract OCR failed for {document.source_name}: {exc}"
            ) from exc

        mean_confidence = sum(confidences) / len(confidences) if confidences else 0.0
        return OcrResult(
            text="\n\n".join(t for t in page_texts if t).strip(),
            confidence=max(0.0, min(1.0, mean_confidence / 100.0)),
        )

    def _render_pages(self, document: Document) -> Iterator[Image.Image]:
        if document.mime_type != MIME_PDF:
            image = Image.open(io.BytesIO(document.content))
            image.load()
            yield image
            return
        with pymupdf.open(stream=document.content, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
            for page in doc:
                pixmap = page.get_pixmap(dpi=self._dpi)
                yield Image.open(io.BytesIO(pixmap.tobytes("png")))

    @staticmethod
    def _collect_words(data: dict[str, list[Any]]) -> tuple[str, list[float]]:
        lines: dict[tuple[int, int, int], list[str]] = {}
        confidences: list[float] = []
        for i, word in enumerate(data["text"]):
            word = (word or "").strip()
            confidence = float(data["conf"][i])
            if not word or confidence < 0:
                continue
            key = (data["block_num"][i], data["par_num"][i], data["line_num"][i])
            lines.setdefault(key, []).append(word)
            confidences.append(confidence)
        return "\n".join(" ".join(words) for words in lines.values()), confidences
