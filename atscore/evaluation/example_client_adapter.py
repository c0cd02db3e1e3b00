"""Example evaluation client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseEvaluationClient and register the provider in EvaluatorFactory.
"""

import json
from typing import ClassVar

from atscore.evaluation.client_base import BaseEvaluationClient


class ExampleClientAdapter(BaseEvaluationClient):
    """Example adapter that returns a fixed, valid category result.

    No network calls. Useful for local development, tests, and as a template
    for building real provider adapters.
    """

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "score": 75,
        "status": "good",
        "issues": [],
        "recommendations": ["Connect a scoring provider for a real evaluation"],
    }

    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> str:
        _ = model, temperature, system_prompt, user_prompt, json_schema
        return json.dumps(self.DEFAULT_RESPONSE)
