import io

import pytest
from PIL import Image, ImageDraw
from reportlab.lib.pagesizes import letter
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from atscore.criteria.models import Rubric
from atscore.criteria.registry import CriterionRegistry
from atscore.extraction.models import ExtractedText

CV_LINES = [
    "Jane Smith",
    "Senior Software Engineer",
    "jane.smith@example.com | +1-555-123-4567",
    "EXPERIENCE",
    "Led a team of 4 developers and reduced page load time by 35%.",
    "EDUCATION",
    "BSc Computer Science, University of Technology, 2015-2019",
    "SKILLS",
    "Python, SQL, AWS, Docker",
]


def _make_text_pdf(pages: list[list[str]]) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for page_lines in pages:
        y = 720
        for line in page_lines:
            c.drawString(72, y, line)
            y -= 18
        c.showPage()
    c.save()
    return buf.getvalue()


def _make_text_image(lines: list[str]) -> Image.Image:
    image = Image.new("RGB", (900, 40 + 30 * len(lines)), "white")
    draw = ImageDraw.Draw(image)
    for i, line in enumerate(lines):
        draw.text((20, 20 + 30 * i), line, fill="black")
    return image


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """A single-page PDF with a real text layer."""
    return _make_text_pdf([CV_LINES])


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """A two-page PDF with known text on each page."""
    return _make_text_pdf([["Page one content"], ["Page two content"]])


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """A valid PDF with no text content (blank page)."""
    return _make_text_pdf([[]])


@pytest.fixture()
def scanned_pdf_bytes() -> bytes:
    """A PDF whose only content is an image of text (no text layer)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawImage(ImageReader(_make_text_image(CV_LINES)), 36, 400, width=540, height=200)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def png_bytes() -> bytes:
    buf = io.BytesIO()
    _make_text_image(CV_LINES).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def cv_text_250_words() -> str:
    """A plain-text CV of exactly 250 words."""
    header = "Jane Smith Software Engineer jane.smith@example.com EXPERIENCE".split()
    filler = "Developed and maintained services that improved reliability for customers".split()
    words = list(header)
    while len(words) < 250:
        words.extend(filler)
    return " ".join(words[:250])


@pytest.fixture()
def extracted_text() -> ExtractedText:
    return ExtractedText(text="\n".join(CV_LINES), method="native", confidence=1.0)


@pytest.fixture()
def registry() -> CriterionRegistry:
    return CriterionRegistry(
        [
            Rubric(
                category="Quantitative Impact",
                rubric="Look for metrics.",
                job_rubric="Look for metrics relevant to the job.",
            ),
            Rubric(category="Length", rubric="Ideal is 200-600 words."),
            Rubric(category="Completeness", rubric="Check all sections."),
            Rubric(
                category="Keyword Match",
                rubric="Match job keywords.",
                requires_job_description=True,
            ),
        ]
    )
