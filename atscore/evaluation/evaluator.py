"""AI-backed criterion evaluator."""

import json
import re
from pathlib import Path
from typing import Any

from atscore.criteria.models import Rubric
from atscore.criteria.registry import CriterionRegistry
from atscore.evaluation.base import BaseCriterionEvaluator
from atscore.evaluation.client_base import BaseEvaluationClient
from atscore.evaluation.exceptions import EvaluationError
from atscore.evaluation.models import CategoryResult, JobContext
from atscore.evaluation.prompt_loader import (
    load_json_schema,
    load_prompt_template,
    load_system_prompt,
)
from atscore.evaluation.validator import validate_and_build
from atscore.extraction.models import ExtractedText
from atscore.logging.logger import Log

_SENTENCE_END = re.compile(r"[.!?](?=\s|$)")
_TRUNCATION_BUFFER = 100
_NOT_PROVIDED = "Not provided"


def job_description_required(category: str) -> CategoryResult:
    return CategoryResult.error(
        category,
        f"Job description is required to evaluate {category}",
        recommendations=(
            "Provide the target job description to get a keyword match score",
        ),
    )


def truncate_for_ai(text: str, max_length: int) -> str:
    """Cut text to fit max_length, ending on a sentence boundary when one is near.

    The cut keeps the first ``max_length - 100`` characters. It backs up to
    the last sentence end only if that end lies in the second half of the
    kept text.
    """
    if len(text) <= max_length:
        return text
    budget = max(max_length - _TRUNCATION_BUFFER, 0)
    head = text[:budget]
    last_end = max((m.end() for m in _SENTENCE_END.finditer(head)), default=0)
    if last_end >= budget // 2:
        head = head[:last_end]
    truncated = head.rstrip() + "..."
    Log.debug(f"Truncated CV text from {len(text)} to {len(truncated)} chars")
    return truncated


class CriterionEvaluator(BaseCriterionEvaluator):
    """Scores one category by sending its rubric and the CV to an AI provider."""

    def __init__(
        self,
        *,
        client: BaseEvaluationClient,
        registry: CriterionRegistry,
        model: str,
        temperature: float = 0.0,
        max_text_length: int = 30000,
        prompt_template_path: Path | None = None,
        system_prompt_path: Path | None = None,
        json_schema_path: Path | None = None,
    ) -> None:
        self._client = client
        self._registry = registry
        self._model = model
        self._temperature = temperature
        self._max_text_length = max_text_length
        self._prompt_template = load_prompt_template(prompt_template_path)
        self._system_prompt = load_system_prompt(system_prompt_path)
        schema_str = load_json_schema(json_schema_path)
        self._json_schema = schema_str
        self._json_schema_dict = json.loads(schema_str)

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

        prompt = self._build_prompt(rubric, extracted_text.text, job_context)
        Log.debug(f"Evaluation prompt for '{category}':\n{prompt}")
        try:
            raw_response = await self._call_ai(prompt)
            Log.debug(f"AI raw response for '{category}':\n{raw_response}")
            result = validate_and_build(self._parse_json(raw_response), category)
        except EvaluationError as exc:
            Log.warning(f"Evaluation of '{category}' failed: {exc}")
            return CategoryResult.error(category, f"Evaluation failed: {exc}")

        Log.info(f"Evaluated '{category}': score {result.score} ({result.status})")
        return result

    def _build_prompt(
        self,
        rubric: Rubric,
        cv_text: str,
        job_context: JobContext | None,
    ) -> str:
        job_name = job_context.job_name if job_context else None
        job_description = job_context.job_description if job_context else None
        rubric_text = rubric.rubric
        if rubric.job_rubric and job_description:
            rubric_text = rubric.job_rubric
        return self._prompt_template.format(
            rubric=rubric_text,
            job_name=job_name or _NOT_PROVIDED,
            job_description=job_description or _NOT_PROVIDED,
            cv_text=truncate_for_ai(cv_text, self._max_text_length),
            json_schema=self._json_schema,
        )

    async def _call_ai(self, prompt: str) -> str:
        return await self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
            json_schema=self._json_schema_dict,
        )

    @staticmethod
    def _parse_json(raw: str) -> dict[str, Any]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise EvaluationError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise EvaluationError("JSON response must be an object")
        return parsed
