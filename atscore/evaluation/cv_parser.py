"""Rule-based CV structure detection.

Splits CV text into the sections named by recognizable header lines and
counts the contact signals an ATS looks for.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

SECTION_PATTERNS: dict[str, re.Pattern[str]] = {
    "contact": re.compile(r"\b(contact|personal|info)", re.IGNORECASE),
    "summary": re.compile(r"\b(summary|profile|objective|about)", re.IGNORECASE),
    "experience": re.compile(
        r"\b(experience|work|employment|career|professional)", re.IGNORECASE
    ),
    "education": re.compile(r"\b(education|academic|qualification|degree)", re.IGNORECASE),
    "skills": re.compile(r"\b(skills|technical|competenc|abilities)", re.IGNORECASE),
}

_MAX_HEADER_WORDS = 4
_EMAIL = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
_PHONE = re.compile(r"(?:\+?\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")
_LINKEDIN = "linkedin.com/in/"


@dataclass(frozen=True)
class CvMetadata:
    word_count: int
    has_email: bool
    has_phone: bool
    has_linkedin: bool
    section_count: int


@dataclass(frozen=True)
class ParsedCv:
    """CV text with its detected sections, keyed by section name."""

    text: str
    sections: Mapping[str, str]
    metadata: CvMetadata

    def has_section(self, name: str) -> bool:
        return name in self.sections


def parse_cv(text: str) -> ParsedCv:
    sections: dict[str, str] = {}
    current: str | None = None
    content: list[str] = []

    for line in (raw.strip() for raw in text.splitlines()):
        if not line:
            continue
        header = _match_header(line)
        if header is not None:
            if current is not None and content:
                sections[current] = " ".join(content)
            current, content = header, []
        elif current is not None:
            content.append(line)
    if current is not None and content:
        sections[current] = " ".join(content)

    metadata = CvMetadata(
        word_count=len(text.split()),
        has_email=_EMAIL.search(text) is not None,
        has_phone=_PHONE.search(text) is not None,
        has_linkedin=_LINKEDIN in text.lower(),
        section_count=len(sections),
    )
    return ParsedCv(text=text, sections=MappingProxyType(sections), metadata=metadata)


def _match_header(line: str) -> str | None:
    """Return the section a header line opens, or None for body lines."""
    candidate = line.rstrip(":").strip()
    if len(candidate.split()) > _MAX_HEADER_WORDS:
        return None
    for name, pattern in SECTION_PATTERNS.items():
        if pattern.search(candidate):
            return name
    return None
