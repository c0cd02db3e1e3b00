from typing import Any

import httpx
import openai

from atscore.evaluation.client_base import BaseEvaluationClient
from atscore.evaluation.exceptions import EvaluationError, EvaluationNetworkError
from atscore.logging.logger import Log

_RESPONSE_SCHEMA_NAME = "category_result"


class OpenAIClientAdapter(BaseEvaluationClient):
    """Async client for OpenAI and OpenAI-compatible chat endpoints.

    Retries are disabled; each evaluation runs under the orchestrator timeout.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: float,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )

    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> str:
        try:
            response = await self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                response_format=_response_format(json_schema),
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except (openai.APITimeoutError, httpx.TimeoutException) as exc:
            raise EvaluationNetworkError(f"AI provider network error: request timed out ({exc})") from exc
        except (openai.APIConnectionError, httpx.ConnectError) as exc:
            raise EvaluationNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIStatusError as exc:
            raise EvaluationNetworkError(
                f"AI provider API error: HTTP {exc.status_code}: {exc.message}"
            ) from exc
        except openai.APIError as exc:
            raise EvaluationNetworkError(f"AI provider API error: {exc}") from exc

        if response.usage is not None:
            Log.debug(
                f"{model} usage: {response.usage.prompt_tokens} prompt / "
                f"{response.usage.completion_tokens} completion tokens"
            )
        if not response.choices:
            raise EvaluationError("AI returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise EvaluationError("AI returned empty response")
        return content


def _response_format(json_schema: dict[str, object]) -> dict[str, Any]:
    return {
        "type": "json_schema",
        "json_schema": {
            "name": _RESPONSE_SCHEMA_NAME,
            "strict": True,
            "schema": json_schema,
        },
    }
