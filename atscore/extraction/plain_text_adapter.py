from atscore.extraction.base import BaseNativeExtractor
from atscore.extraction.exceptions import NativeExtractionError
from atscore.processor.models import Document


class PlainTextAdapter(BaseNativeExtractor):
    """Decodes text/plain uploads as UTF-8.

    A leading BOM is dropped, undecodable bytes become U+FFFD and NUL
    bytes are removed.
    """

    def extract(self, document: Document) -> str:
        try:
            text = document.content.decode("utf-8-sig", errors="replace")
        except Exception as exc:
            raise NativeExtractionError(
                f"plain text decoding failed for {document.source_name}: {exc}"
            ) from exc
        return text.replace("\x00", "").strip()
