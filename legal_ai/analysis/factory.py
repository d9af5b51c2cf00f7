from dataclasses import dataclass

from legal_ai.analysis.client_base import BaseCompletionClient
from legal_ai.analysis.example_client_adapter import ExampleClientAdapter
from legal_ai.analysis.openai_client_adapter import OpenAIClientAdapter
from legal_ai.analysis.retry import RetryingCompletionClient
from legal_ai.config.settings import Settings


@dataclass(frozen=True)
class ProviderEndpoint:
    """Where an OpenAI-compatible provider lives when ``llm_base_url`` is unset."""

    default_base_url: str | None = None
    requires_base_url: bool = False


# Every entry speaks the OpenAI chat-completions protocol.
PROVIDER_ENDPOINTS: dict[str, ProviderEndpoint] = {
    "openai": ProviderEndpoint(),
    "openai_compatible": ProviderEndpoint(requires_base_url=True),
    "openrouter": ProviderEndpoint("https://openrouter.ai/api/v1"),
    "groq": ProviderEndpoint("https://api.groq.com/openai/v1"),
    "together": ProviderEndpoint("https://api.together.xyz/v1"),
    "deepseek": ProviderEndpoint("https://api.deepseek.com/v1"),
    "ollama": ProviderEndpoint("http://localhost:11434/v1"),
}

OFFLINE_PROVIDER = "example"


def resolve_base_url(provider: str, configured: str | None) -> str | None:
    """Pick the endpoint for ``provider``; an explicit ``llm_base_url`` always wins.

    Raises:
        ValueError: for unknown providers, or ``openai_compatible`` without a URL.
    """
    endpoint = PROVIDER_ENDPOINTS.get(provider)
    if endpoint is None:
        supported = [OFFLINE_PROVIDER, *sorted(PROVIDER_ENDPOINTS)]
        raise ValueError(f"Unknown LLM provider '{provider}'. Choose from: {supported}")
    base_url = (configured or "").strip() or endpoint.default_base_url
    if endpoint.requires_base_url and not base_url:
        raise ValueError(f"llm_base_url is required for llm_provider={provider}")
    return base_url


class CompletionClientFactory:
    """Builds the completion client described by the ``llm_*`` settings."""

    @classmethod
    def create(cls, settings: Settings) -> BaseCompletionClient:
        provider = settings.llm_provider.strip().lower()
        if provider == OFFLINE_PROVIDER:
            return ExampleClientAdapter()
        client: BaseCompletionClient = OpenAIClientAdapter(
            api_key=settings.llm_api_key,
            timeout_seconds=settings.llm_timeout_seconds,
            base_url=resolve_base_url(provider, settings.llm_base_url),
        )
        if settings.llm_retry_max_attempts <= 1:
            return client
        return RetryingCompletionClient(
            client,
            max_attempts=settings.llm_retry_max_attempts,
            base_delay=settings.llm_retry_base_delay,
            max_delay=settings.llm_retry_max_delay,
        )
