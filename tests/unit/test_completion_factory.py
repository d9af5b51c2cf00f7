from unittest.mock import patch

import pytest

from legal_ai.analysis.example_client_adapter import ExampleClientAdapter
from legal_ai.analysis.factory import CompletionClientFactory, resolve_base_url
from legal_ai.analysis.openai_client_adapter import OpenAIClientAdapter
from legal_ai.analysis.retry import RetryingCompletionClient
from legal_ai.config.settings import Settings


@pytest.fixture(autouse=True)
def mock_openai():
    with patch("legal_ai.analysis.openai_client_adapter.openai.OpenAI") as cls:
        yield cls


class TestCompletionClientFactory:
    def test_example_provider(self) -> None:
        client = CompletionClientFactory.create(Settings(llm_provider="example"))
        assert isinstance(client, ExampleClientAdapter)

    def test_openai_provider_default(self, mock_openai) -> None:
        client = CompletionClientFactory.create(Settings(llm_provider="openai", llm_api_key="k"))
        assert isinstance(client, OpenAIClientAdapter)
        assert mock_openai.call_args.kwargs["base_url"] is None

    def test_known_compatible_provider_gets_default_url(self, mock_openai) -> None:
        CompletionClientFactory.create(Settings(llm_provider="groq"))
        assert mock_openai.call_args.kwargs["base_url"] == "https://api.groq.com/openai/v1"

    def test_openai_compatible_requires_base_url(self) -> None:
        with pytest.raises(ValueError, match="llm_base_url is required"):
            CompletionClientFactory.create(Settings(llm_provider="openai_compatible"))

    def test_openai_compatible_uses_configured_url(self, mock_openai) -> None:
        CompletionClientFactory.create(
            Settings(llm_provider="openai_compatible", llm_base_url="http://vllm:8000/v1")
        )
        assert mock_openai.call_args.kwargs["base_url"] == "http://vllm:8000/v1"

    def test_unknown_provider_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown LLM provider"):
            CompletionClientFactory.create(Settings(llm_provider="carrier-pigeon"))

    def test_retry_wrapper_when_enabled(self) -> None:
        client = CompletionClientFactory.create(
            Settings(llm_provider="openai", llm_retry_max_attempts=3)
        )
        assert isinstance(client, RetryingCompletionClient)


class TestExampleClientAdapter:
    def test_json_mode_returns_json(self) -> None:
        raw = ExampleClientAdapter().complete(
            model="m", temperature=0.3, system_prompt="s", user_prompt="u", json_mode=True
        )
        assert raw.startswith("{")

    def test_text_mode_returns_text(self) -> None:
        raw = ExampleClientAdapter().complete(
            model="m", temperature=0.3, system_prompt="s", user_prompt="u"
        )
        assert raw == ExampleClientAdapter.DEFAULT_TEXT_RESPONSE


class TestResolveBaseUrl:
    def test_openai_without_override_uses_sdk_default(self) -> None:
        assert resolve_base_url("openai", None) is None

    def test_configured_url_overrides_provider_default(self) -> None:
        assert resolve_base_url("ollama", "http://gpu-box:11434/v1") == "http://gpu-box:11434/v1"

    def test_blank_override_falls_back_to_default(self) -> None:
        assert resolve_base_url("deepseek", "  ") == "https://api.deepseek.com/v1"
