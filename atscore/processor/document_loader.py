from atscore.processor.exceptions import (
    EmptyDocumentError,
    PayloadTooLargeError,
    UnsupportedFormatError,
)
from atscore.processor.models import SUPPORTED_MIME_TYPES, Document


def normalize_mime_type(declared: str) -> str:
    """Strip parameters and case: 'Text/Plain; charset=utf-8' -> 'text/plain'."""
    return declared.split(";", 1)[0].strip().lower()


class DocumentLoader:
    """Validates an uploaded payload and wraps it in a Document.

    Only the declared MIME type and size are checked; content is trusted.
    """

    DEFAULT_MAX_BYTES = 10 * 1024 * 1024

    def __init__(self, max_bytes: int | None = None) -> None:
        self._max_bytes = max_bytes if max_bytes is not None else self.DEFAULT_MAX_BYTES

    def load(self, raw_bytes: bytes, declared_mime_type: str, source_name: str) -> Document:
        """Build a Document from raw upload bytes.

        Raises:
            UnsupportedFormatError: if the MIME type is not supported.
            PayloadTooLargeError: if the payload exceeds the size ceiling.
            EmptyDocumentError: if the payload is empty.
        """
        mime_type = normalize_mime_type(declared_mime_type or "")
        if mime_type not in SUPPORTED_MIME_TYPES:
            raise UnsupportedFormatError(
                f"Unsupported document type '{declared_mime_type}'. "
                f"Supported: {sorted(SUPPORTED_MIME_TYPES)}"
            )
        size = len(raw_bytes)
        if size > self._max_bytes:
            raise PayloadTooLargeError(
                f"Document {source_name} is {size} bytes, limit is {self._max_bytes}"
            )
        if size == 0:
            raise EmptyDocumentError(f"Document {source_name} is empty")
        return Document(
            content=bytes(raw_bytes),
            mime_type=mime_type,
            size_bytes=size,
            source_name=source_name,
        )
