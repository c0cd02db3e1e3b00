"""Deterministic category evaluator.

Scores categories with fixed text rules instead of an AI provider. Each rule
starts at 100 and deducts points per finding; the score never drops below 0.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass, field

from atscore.criteria.registry import CriterionRegistry
from atscore.evaluation.base import BaseCriterionEvaluator
from atscore.evaluation.cv_parser import ParsedCv, parse_cv
from atscore.evaluation.evaluator import job_description_required
from atscore.evaluation.models import CategoryResult, CategoryStatus, JobContext
from atscore.extraction.models import ExtractedText
from atscore.logging.logger import Log

ACTION_VERBS = (
    "managed", "developed", "implemented", "created", "designed", "led",
    "coordinated", "analyzed", "improved", "optimized", "achieved",
    "delivered", "collaborated",
)

_QUANTIFIED = re.compile(r"\d+%|\d+\+|\$\d+|\d+ years?|\d+ months?", re.IGNORECASE)
_KEYWORD = re.compile(r"[a-z][a-z0-9+#]*(?:[.\-/][a-z0-9+#]+)*")
_STOPWORDS = frozenset(
    "a an and are as at be by for from has have in is it of on or our the to "
    "we will with you your this that who can able must should plus etc years "
    "year experience work team strong good knowledge skills ability role job".split()
)
_MAX_LISTED_KEYWORDS = 10


@dataclass
class RuleOutcome:
    score: int = 100
    issues: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    def deduct(self, points: int, issue: str, recommendation: str) -> None:
        self.score -= points
        self.issues.append(issue)
        self.recommendations.append(recommendation)


Rule = Callable[[ParsedCv, JobContext | None], RuleOutcome]


def check_quantitative_impact(cv: ParsedCv, job_context: JobContext | None) -> RuleOutcome:
    outcome = RuleOutcome()
    metrics = len(_QUANTIFIED.findall(cv.text))
    if metrics == 0:
        outcome.deduct(
            60,
            "Missing quantifiable achievements",
            "Include specific numbers, percentages, and metrics",
        )
    elif metrics < 3:
        outcome.deduct(
            30,
            f"Only {metrics} quantified achievement(s) found",
            "Quantify more results, e.g. team size, savings or growth",
        )
    lowered = cv.text.lower()
    verbs = [verb for verb in ACTION_VERBS if re.search(rf"\b{verb}\b", lowered)]
    if len(verbs) < 5:
        outcome.deduct(
            15,
            "Limited use of strong action verbs",
            "Start achievements with action verbs like 'managed', 'developed', 'implemented'",
        )
    return outcome


def check_length(cv: ParsedCv, job_context: JobContext | None) -> RuleOutcome:
    outcome = RuleOutcome()
    words = cv.metadata.word_count
    if words < 200:
        outcome.deduct(
            40,
            f"CV is too short ({words} words, ideal is 200-600)",
            "Expand experience descriptions with more detail",
        )
    elif words > 800:
        outcome.deduct(
            30,
            f"CV is too long ({words} words, ideal is 200-600)",
            "Condense content to 1-2 pages for better ATS compatibility",
        )
    elif words > 600:
        outcome.deduct(
            10,
            f"CV is slightly long ({words} words, ideal is 200-600)",
            "Trim older or less relevant roles",
        )
    return outcome


def check_completeness(cv: ParsedCv, job_context: JobContext | None) -> RuleOutcome:
    outcome = RuleOutcome()
    meta = cv.metadata
    if not meta.has_email:
        outcome.deduct(
            15,
            "Email address not detected or poorly formatted",
            "Include a clear email address in standard format",
        )
    if not meta.has_phone:
        outcome.deduct(
            10,
            "Phone number not detected or poorly formatted",
            "Include phone number in standard format (e.g., +1-555-123-4567)",
        )
    if meta.section_count < 3:
        outcome.deduct(
            20,
            "Limited section structure detected",
            'Use clear section headers like "Experience", "Education", "Skills"',
        )
    for section, points, header in (
        ("experience", 15, "Experience"),
        ("education", 10, "Education"),
        ("skills", 10, "Skills"),
        ("summary", 5, "Summary"),
    ):
        if not cv.has_section(section):
            outcome.deduct(
                points,
                f"{header} section not clearly identified",
                f"Add a section with the standard header '{header}'",
            )
    return outcome


def check_keyword_match(cv: ParsedCv, job_context: JobContext | None) -> RuleOutcome:
    outcome = RuleOutcome()
    keywords = extract_keywords(job_context.job_description if job_context else None)
    if not keywords:
        outcome.deduct(
            100,
            "Job description contains no recognizable keywords",
            "Provide a job description that lists the required skills",
        )
        return outcome
    lowered = cv.text.lower()
    missing = [
        keyword
        for keyword in keywords
        if not re.search(rf"(?<![a-z0-9]){re.escape(keyword)}(?![a-z0-9])", lowered)
    ]
    outcome.score = round(100 * (len(keywords) - len(missing)) / len(keywords))
    if missing:
        shown = ", ".join(missing[:_MAX_LISTED_KEYWORDS])
        outcome.issues.append(f"Missing job keywords: {shown}")
        outcome.recommendations.append(
            "Mention the missing keywords where they reflect your real experience"
        )
    return outcome


def extract_keywords(job_description: str | None) -> list[str]:
    """Distinct keywords of a job description, in order of first appearance."""
    if not job_description:
        return []
    seen: dict[str, None] = {}
    for token in _KEYWORD.findall(job_description.lower()):
        if len(token) > 1 and token not in _STOPWORDS:
            seen.setdefault(token, None)
    return list(seen)


class RuleBasedEvaluator(BaseCriterionEvaluator):
    """Scores categories with deterministic rules; no network access."""

    RULES: dict[str, Rule] = {
        "Quantitative Impact": check_quantitative_impact,
        "Length": check_length,
        "Completeness": check_completeness,
        "Keyword Match": check_keyword_match,
    }

    def __init__(
        self,
        *,
        registry: CriterionRegistry,
        status_bands: tuple[int, int, int] = (85, 70, 50),
    ) -> None:
        self._registry = registry
        self._status_bands = status_bands

    async def evaluate(
        self,
        category: str,
        extracted_text: ExtractedText,
        job_context: JobContext | None = None,
    ) -> CategoryResult:
        rubric = self._registry.get(category)
        has_job_description = job_context is not None and job_context.has_job_description
        if rubric.requires_job_description and not has_job_description:
            Log.info(f"Skipping '{category}': no job description provided")
            return job_description_required(category)

        rule = self.RULES.get(category)
        if rule is None:
            Log.warning(f"No rule-based check for '{category}'")
            return CategoryResult.error(category, f"No rule-based check for {category}")

        outcome = rule(parse_cv(extracted_text.text), job_context)
        score = max(0, min(100, outcome.score))
        Log.info(f"Rule-evaluated '{category}': score {score}")
        return CategoryResult(
            category=category,
            score=score,
            status=self._status_for(score),
            issues=tuple(outcome.issues),
            recommendations=tuple(outcome.recommendations),
        )

    def _status_for(self, score: int) -> CategoryStatus:
        excellent, good, fair = self._status_bands
        if score >= excellent:
            return "excellent"
        if score >= good:
            return "good"
        if score >= fair:
            return "fair"
        return "poor"
