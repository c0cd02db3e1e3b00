from dataclasses import dataclass
from typing import ClassVar

from atscore.config.settings import Settings
from atscore.criteria.registry import CriterionRegistry
from atscore.evaluation.base import BaseCriterionEvaluator
from atscore.evaluation.evaluator import CriterionEvaluator
from atscore.evaluation.example_client_adapter import ExampleClientAdapter
from atscore.evaluation.openai_client_adapter import OpenAIClientAdapter
from atscore.evaluation.rule_based_evaluator import RuleBasedEvaluator

_DEFAULT_TIMEOUT_SECONDS = 30


@dataclass(frozen=True)
class ProviderConfig:
    """Connection details of one OpenAI-compatible provider."""

    api_key: str
    model_name: str
    timeout_seconds: int
    base_url: str | None


class EvaluatorFactory:
    """Creates the configured criterion evaluator.

    "rules" scores without any AI. Every provider except "rules" and
    "example" speaks the OpenAI chat API and reads its credentials from
    the ``evaluation_<provider>_*`` settings.
    """

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "gemini": "https://generativelanguage.googleapis.com/v1beta/openai/",
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def supported_providers(cls) -> list[str]:
        return [
            "rules",
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]

    @classmethod
    def create(cls, settings: Settings, registry: CriterionRegistry) -> BaseCriterionEvaluator:
        """Create a configured evaluator from application settings."""
        provider = settings.evaluation_provider.strip().lower()
        if provider == "rules":
            return RuleBasedEvaluator(
                registry=registry,
                status_bands=(
                    settings.status_excellent_min,
                    settings.status_good_min,
                    settings.status_fair_min,
                ),
            )
        if provider == "example":
            return CriterionEvaluator(
                client=ExampleClientAdapter(),
                registry=registry,
                model="example",
                max_text_length=settings.max_ai_text_length,
            )
        config = cls.provider_config(provider, settings)
        return CriterionEvaluator(
            client=OpenAIClientAdapter(
                api_key=config.api_key,
                timeout_seconds=config.timeout_seconds,
                base_url=config.base_url,
            ),
            registry=registry,
            model=config.model_name,
            temperature=settings.evaluation_temperature,
            max_text_length=settings.max_ai_text_length,
        )

    @classmethod
    def provider_config(cls, provider: str, settings: Settings) -> ProviderConfig:
        """Resolve credentials and endpoint for an OpenAI-compatible provider.

        Raises:
            ValueError: for an unknown provider, or openai_compatible
                        without a base URL.
        """
        if provider == "openai":
            base_url = None
        elif provider == "openai_compatible":
            base_url = (settings.evaluation_openai_compatible_base_url or "").strip()
            if not base_url:
                raise ValueError(
                    "evaluation_openai_compatible_base_url is required for "
                    "evaluation_provider=openai_compatible"
                )
        elif provider in cls.OPENAI_COMPATIBLE_BASE_URLS:
            base_url = cls.OPENAI_COMPATIBLE_BASE_URLS[provider]
        else:
            raise ValueError(
                f"Unknown evaluation provider '{provider}'. "
                f"Choose from: {cls.supported_providers()}"
            )

        prefix = f"evaluation_{provider}_"
        return ProviderConfig(
            api_key=getattr(settings, prefix + "api_key") or "",
            model_name=getattr(settings, prefix + "model_name") or "",
            timeout_seconds=getattr(settings, prefix + "timeout_seconds") or _DEFAULT_TIMEOUT_SECONDS,
            base_url=base_url,
        )
