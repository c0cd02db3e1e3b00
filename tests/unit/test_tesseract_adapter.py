import threading
from typing import Any
from unittest.mock import patch

import pytest

from atscore.extraction.exceptions import OcrError
from atscore.extraction.models import OcrResult
from atscore.extraction.tesseract_adapter import TesseractAdapter
from atscore.processor.models import Document

IMAGE_TO_DATA = "atscore.extraction.tesseract_adapter.pytesseract.image_to_data"


def _make_document(content: bytes, mime_type: str = "image/png") -> Document:
    return Document(
        content=content,
        mime_type=mime_type,
        size_bytes=len(content),
        source_name="cv-scan",
    )


def _ocr_data(words: list[tuple[str, float, int]]) -> dict[str, list[Any]]:
    """Build an image_to_data dict from (word, confidence, line_num) tuples."""
    return {
        "text": [w for w, _, _ in words],
        "conf": [c for _, c, _ in words],
        "block_num": [1] * len(words),
        "par_num": [1] * len(words),
        "line_num": [line for _, _, line in words],
    }


class TestTesseractAdapterSupports:
    @pytest.mark.parametrize("mime_type", ["application/pdf", "image/png", "image/jpeg"])
    def test_supports_scannable_types(self, mime_type: str) -> None:
        assert TesseractAdapter().supports(mime_type)

    def test_does_not_support_plain_text(self) -> None:
        assert not TesseractAdapter().supports("text/plain")

    def test_recognize_rejects_unsupported_type(self) -> None:
        with pytest.raises(OcrError, match="does not support"):
            TesseractAdapter().recognize(_make_document(b"hello", "text/plain"))


class TestTesseractAdapterRecognize:
    def test_joins_words_into_lines(self, png_bytes: bytes) -> None:
        data = _ocr_data(
            [("Jane", 90, 1), ("Smith", 80, 1), ("Engineer", 70, 2)]
        )
        with patch(IMAGE_TO_DATA, return_value=data):
            result = TesseractAdapter().recognize(_make_document(png_bytes))

        assert isinstance(result, OcrResult)
        assert result.text == "Jane Smith\nEngineer"
        assert result.confidence == pytest.approx(0.8)

    def test_skips_blank_words_and_negative_confidence(self, png_bytes: bytes) -> None:
        data = _ocr_data([("", -1, 0), ("Jane", 60, 1), ("  ", 95, 1), ("noise", -1, 1)])
        with patch(IMAGE_TO_DATA, return_value=data):
            result = TesseractAdapter().recognize(_make_document(png_bytes))

        assert result.text == "Jane"
        assert result.confidence == pytest.approx(0.6)

    def test_no_words_gives_zero_confidence(self, png_bytes: bytes) -> None:
        with patch(IMAGE_TO_DATA, return_value=_ocr_data([])):
            result = TesseractAdapter().recognize(_make_document(png_bytes))

        assert result.text == ""
        assert result.confidence == 0.0

    def test_passes_language(self, png_bytes: bytes) -> None:
        with patch(IMAGE_TO_DATA, return_value=_ocr_data([])) as mock_ocr:
            TesseractAdapter(language="deu").recognize(_make_document(png_bytes))

        assert mock_ocr.call_args.kwargs["lang"] == "deu"

    def test_renders_each_pdf_page(self, multi_page_pdf_bytes: bytes) -> None:
        pages = [
            _ocr_data([("Page", 90, 1), ("one", 90, 1)]),
            _ocr_data([("Page", 70, 1), ("two", 70, 1)]),
        ]
        with patch(IMAGE_TO_DATA, side_effect=pages) as mock_ocr:
            result = TesseractAdapter(dpi=72).recognize(
                _make_document(multi_page_pdf_bytes, "application/pdf")
            )

        assert mock_ocr.call_count == 2
        assert result.text == "Page one\n\nPage two"
        assert result.confidence == pytest.approx(0.8)

    def test_wraps_engine_failure(self, png_bytes: bytes) -> None:
        with patch(IMAGE_TO_DATA, side_effect=RuntimeError("tesseract not installed")):
            with pytest.raises(OcrError, match="tesseract OCR failed for cv-scan"):
                TesseractAdapter().recognize(_make_document(png_bytes))

    def test_wraps_unreadable_image(self) -> None:
        with pytest.raises(OcrError, match="cv-scan"):
            TesseractAdapter().recognize(_make_document(b"not an image", "image/jpeg"))


class TestTesseractAdapterStop:
    def test_set_stop_event_skips_recognition(self, png_bytes: bytes) -> None:
        stop = threading.Event()
        stop.set()
        with patch(IMAGE_TO_DATA) as mock_ocr:
            with pytest.raises(OcrError, match="OCR cancelled for cv-scan"):
                TesseractAdapter().recognize(_make_document(png_bytes), stop)

        mock_ocr.assert_not_called()

    def test_stops_between_pdf_pages(self, multi_page_pdf_bytes: bytes) -> None:
        stop = threading.Event()

        def recognize_page(*args: Any, **kwargs: Any) -> dict[str, list[Any]]:
            stop.set()
            return _ocr_data([("Page", 90, 1)])

        with patch(IMAGE_TO_DATA, side_effect=recognize_page) as mock_ocr:
            with pytest.raises(OcrError, match="cancelled"):
                TesseractAdapter(dpi=72).recognize(
                    _make_document(multi_page_pdf_bytes, "application/pdf"), stop
                )

        assert mock_ocr.call_count == 1

    def test_unset_stop_event_recognizes_all_pages(self, multi_page_pdf_bytes: bytes) -> None:
        with patch(IMAGE_TO_DATA, return_value=_ocr_data([("Page", 90, 1)])) as mock_ocr:
            TesseractAdapter(dpi=72).recognize(
                _make_document(multi_page_pdf_bytes, "application/pdf"), threading.Event()
            )

        assert mock_ocr.call_count == 2
