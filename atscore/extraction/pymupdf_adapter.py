import pymupdf

from atscore.extraction.base import BaseNativeExtractor
from atscore.extraction.exceptions import NativeExtractionError
from atscore.processor.models import Document


class PyMuPdfAdapter(BaseNativeExtractor):
    """Reads the PDF text layer using PyMuPDF."""

    def extract(self, document: Document) -> str:
        try:
            with pymupdf.open(stream=document.content, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [page.get_text() for page in doc]
            return "\n".join(pages).strip()
        except NativeExtractionError:
            raise
        except Exception as exc:
            raise NativeExtractionError(
                f"pymupdf extraction failed for {document.source_name}: {exc}"
            ) from exc
