import io

import pdfplumber

from atscore.extraction.base import BaseNativeExtractor
from atscore.extraction.exceptions import NativeExtractionError
from atscore.processor.models import Document


class PdfPlumberAdapter(BaseNativeExtractor):
    """Reads the PDF text layer using pdfplumber."""

    def extract(self, document: Document) -> str:
        try:
            with pdfplumber.open(io.BytesIO(document.content)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
            return "\n".join(pages).strip()
        except NativeExtractionError:
            raise
        except Exception as exc:
            raise NativeExtractionError(
                f"pdfplumber extraction failed for {document.source_name}: {exc}"
            ) from exc
