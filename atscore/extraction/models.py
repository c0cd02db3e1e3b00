from dataclasses import dataclass, field
from typing import Literal

ExtractionMethod = Literal["native", "ocr"]

_VALID_METHODS = frozenset({"native", "ocr"})


@dataclass(frozen=True)
class OcrResult:
    """Raw output of an OCR engine: recognized text and mean confidence."""

    text: str
    confidence: float


@dataclass(frozen=True)
class ExtractedText:
    """Normalized document text plus how it was obtained.

    length is derived from text and always equals len(text).
    """

    text: str
    method: ExtractionMethod
    confidence: float
    length: int = field(init=False)

    def __post_init__(self) -> None:
        if not self.text:
            raise ValueError("ExtractedText.text must not be empty")
        if self.method not in _VALID_METHODS:
            raise ValueError(
                f"ExtractedText.method must be one of {sorted(_VALID_METHODS)}, "
                f"got {self.method!r}"
            )
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(
                f"ExtractedText.confidence must be within [0, 1], got {self.confidence}"
            )
        object.__setattr__(self, "length", len(self.text))
