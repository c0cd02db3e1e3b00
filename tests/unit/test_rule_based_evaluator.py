import pytest

from atscore.criteria.exceptions import UnknownCategoryError
from atscore.criteria.models import Rubric
from atscore.criteria.registry import CriterionRegistry
from atscore.evaluation.models import JobContext
from atscore.evaluation.rule_based_evaluator import RuleBasedEvaluator, extract_keywords
from atscore.extraction.models import ExtractedText

STRONG_CV = "\n".join(
    [
        "Jane Smith",
        "jane@example.com | (555) 123-4567",
        "SUMMARY",
        "Backend engineer with 8 years in payments.",
        "EXPERIENCE",
        "Led and managed a team of 6; developed and implemented a ledger service.",
        "Delivered a migration that cut cost by 30% and saved $120000.",
        "EDUCATION",
        "BSc Computer Science",
        "SKILLS",
        "Python, SQL, Kafka",
    ]
)


def _text(text: str) -> ExtractedText:
    return ExtractedText(text=text, method="native", confidence=1.0)


class TestLength:
    async def test_ideal_length_scores_full(
        self, registry: CriterionRegistry, cv_text_250_words: str
    ) -> None:
        result = await RuleBasedEvaluator(registry=registry).evaluate(
            "Length", _text(cv_text_250_words)
        )
        assert result.score == 100
        assert result.status == "excellent"
        assert result.issues == ()

    async def test_short_cv(self, registry: CriterionRegistry, extracted_text: ExtractedText) -> None:
        result = await RuleBasedEvaluator(registry=registry).evaluate("Length", extracted_text)
        assert result.score == 60
        assert result.status == "fair"
        assert result.issues == ("CV is too short (35 words, ideal is 200-600)",)

    @pytest.mark.parametrize(("words", "score"), [(700, 90), (900, 70)])
    async def test_long_cv(self, registry: CriterionRegistry, words: int, score: int) -> None:
        result = await RuleBasedEvaluator(registry=registry).evaluate(
            "Length", _text("word " * words)
        )
        assert result.score == score


class TestCompleteness:
    async def test_missing_summary(
        self, registry: CriterionRegistry, extracted_text: ExtractedText
    ) -> None:
        result = await RuleBasedEvaluator(registry=registry).evaluate("Completeness", extracted_text)
        assert result.score == 95
        assert result.issues == ("Summary section not clearly identified",)

    async def test_complete_cv(self, registry: CriterionRegistry) -> None:
        result = await RuleBasedEvaluator(registry=registry).evaluate("Completeness", _text(STRONG_CV))
        assert result.score == 100
        assert result.recommendations == ()

    async def test_unstructured_text(self, registry: CriterionRegistry) -> None:
        result = await RuleBasedEvaluator(registry=registry).evaluate(
            "Completeness", _text("just some words")
        )
        assert result.score == 15
        assert result.status == "poor"
        assert len(result.issues) == 7
        assert len(result.recommendations) == 7


class TestQuantitativeImpact:
    async def test_few_metrics_and_verbs(
        self, registry: CriterionRegistry, extracted_text: ExtractedText
    ) -> None:
        result = await RuleBasedEvaluator(registry=registry).evaluate(
            "Quantitative Impact", extracted_text
        )
        assert result.score == 55
        assert result.issues == (
            "Only 1 quantified achievement(s) found",
            "Limited use of strong action verbs",
        )

    async def test_strong_cv(self, registry: CriterionRegistry) -> None:
        result = await RuleBasedEvaluator(registry=registry).evaluate(
            "Quantitative Impact", _text(STRONG_CV)
        )
        assert result.score == 100

    async def test_no_metrics(self, registry: CriterionRegistry, cv_text_250_words: str) -> None:
        result = await RuleBasedEvaluator(registry=registry).evaluate(
            "Quantitative Impact", _text(cv_text_250_words)
        )
        assert result.score == 25
        assert result.issues[0] == "Missing quantifiable achievements"


class TestKeywordMatch:
    async def test_scores_share_of_keywords_found(
        self, registry: CriterionRegistry, extracted_text: ExtractedText
    ) -> None:
        job = JobContext(job_description="Python, SQL, Kubernetes")
        result = await RuleBasedEvaluator(registry=registry).evaluate(
            "Keyword Match", extracted_text, job
        )
        assert result.score == 67
        assert result.status == "fair"
        assert result.issues == ("Missing job keywords: kubernetes",)

    async def test_requires_job_description(
        self, registry: CriterionRegistry, extracted_text: ExtractedText
    ) -> None:
        result = await RuleBasedEvaluator(registry=registry).evaluate(
            "Keyword Match", extracted_text, JobContext(job_name="Backend Engineer")
        )
        assert result.is_error
        assert result.issues == ("Job description is required to evaluate Keyword Match",)

    async def test_description_without_keywords(
        self, registry: CriterionRegistry, extracted_text: ExtractedText
    ) -> None:
        result = await RuleBasedEvaluator(registry=registry).evaluate(
            "Keyword Match", extracted_text, JobContext(job_description="and the with")
        )
        assert result.score == 0
        assert result.issues == ("Job description contains no recognizable keywords",)

    def test_extract_keywords(self) -> None:
        assert extract_keywords("Python, Node.js and CI/CD. Python, C++") == [
            "python",
            "node.js",
            "ci/cd",
            "c++",
        ]

    def test_extract_keywords_without_description(self) -> None:
        assert extract_keywords(None) == []


class TestRegistryHandling:
    async def test_unknown_category_raises(
        self, registry: CriterionRegistry, extracted_text: ExtractedText
    ) -> None:
        with pytest.raises(UnknownCategoryError):
            await RuleBasedEvaluator(registry=registry).evaluate("Tone", extracted_text)

    async def test_category_without_rule_is_error(self, extracted_text: ExtractedText) -> None:
        registry = CriterionRegistry([Rubric(category="Formatting", rubric="Check layout.")])
        result = await RuleBasedEvaluator(registry=registry).evaluate("Formatting", extracted_text)
        assert result.is_error
        assert result.issues == ("No rule-based check for Formatting",)

    async def test_custom_status_bands(
        self, registry: CriterionRegistry, extracted_text: ExtractedText
    ) -> None:
        evaluator = RuleBasedEvaluator(registry=registry, status_bands=(99, 90, 60))
        result = await evaluator.evaluate("Completeness", extracted_text)
        assert result.score == 95
        assert result.status == "good"
