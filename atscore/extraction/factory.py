from atscore.config.settings import Settings
from atscore.extraction.base import BaseNativeExtractor, BaseOcrEngine
from atscore.extraction.extractor import TextExtractor
from atscore.extraction.pdfplumber_adapter import PdfPlumberAdapter
from atscore.extraction.plain_text_adapter import PlainTextAdapter
from atscore.extraction.pymupdf_adapter import PyMuPdfAdapter
from atscore.extraction.tesseract_adapter import TesseractAdapter
from atscore.processor.models import MIME_PDF, MIME_TEXT


class TextExtractorFactory:
    """Creates the text extractor with the engines chosen in settings."""

    PDF_ADAPTERS: dict[str, type[BaseNativeExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    OCR_ENGINES: dict[str, type[TesseractAdapter]] = {
        "tesseract": TesseractAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> TextExtractor:
        return TextExtractor(
            native_extractors={
                MIME_PDF: cls.create_pdf_extractor(settings),
                MIME_TEXT: PlainTextAdapter(),
            },
            ocr_engine=cls.create_ocr_engine(settings),
            min_native_text_length=settings.min_native_text_length,
        )

    @classmethod
    def create_pdf_extractor(cls, settings: Settings) -> BaseNativeExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.PDF_ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.PDF_ADAPTERS)}"
            )
        return adapter_cls()

    @classmethod
    def create_ocr_engine(cls, settings: Settings) -> BaseOcrEngine:
        engine = settings.ocr_engine.lower()
        engine_cls = cls.OCR_ENGINES.get(engine)
        if engine_cls is None:
            raise ValueError(
                f"Unknown OCR engine '{engine}'. Choose from: {list(cls.OCR_ENGINES)}"
            )
        return engine_cls(language=settings.ocr_language, dpi=settings.ocr_dpi)
