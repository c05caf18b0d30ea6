from typing import ClassVar

from prompt_refiner.config.settings import Settings
from prompt_refiner.refinement.client_base import BaseCompletionClient
from prompt_refiner.refinement.example_client_adapter import ExampleClientAdapter
from prompt_refiner.refinement.exceptions import GatewayConfigurationError
from prompt_refiner.refinement.openai_client_adapter import OpenAIClientAdapter
from prompt_refiner.refinement.refiner import Refiner


class RefinerFactory:
    """Creates a Refiner backed by the configured completion provider."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    KEYLESS_PROVIDERS: ClassVar[frozenset[str]] = frozenset({"ollama"})

    @classmethod
    def create(cls, settings: Settings) -> Refiner:
        """Create a configured refiner from application settings."""
        return Refiner(
            client=cls.create_client(settings),
            model=settings.gateway_model_name,
            temperature=settings.gateway_temperature,
        )

    @classmethod
    def create_client(cls, settings: Settings) -> BaseCompletionClient:
        provider = settings.gateway_provider.lower()
        if provider == "example":
            return ExampleClientAdapter()
        base_url = cls._resolve_base_url(provider, settings)
        api_key = settings.gateway_api_key
        if not api_key and provider in cls.KEYLESS_PROVIDERS:
            api_key = provider
        return OpenAIClientAdapter(
            api_key=api_key,
            timeout_seconds=settings.gateway_timeout_seconds,
            base_url=base_url,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider in ("gateway", "openai_compatible"):
            url = (settings.gateway_base_url or "").strip()
            if not url:
                raise GatewayConfigurationError(
                    f"gateway_base_url is required for gateway_provider={provider}"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return default_base_url
        supported = [
            "example",
            "gateway",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise GatewayConfigurationError(
            f"Unknown gateway provider '{provider}'. Choose from: {supported}"
        )
