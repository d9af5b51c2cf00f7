from typing import Any

import httpx
import openai

from legal_ai.analysis.client_base import BaseCompletionClient
from legal_ai.analysis.exceptions import UpstreamError, UpstreamErrorKind


class OpenAIClientAdapter(BaseCompletionClient):
    """Completion client built on the OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )

    def complete(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int | None = None,
        json_mode: bool = False,
    ) -> str:
        kwargs: dict[str, Any] = {
            "model": model,
            "temperature": temperature,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        }
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = self._client.chat.completions.create(**kwargs)
        except (openai.APITimeoutError, httpx.TimeoutException) as exc:
            raise UpstreamError(
                UpstreamErrorKind.TIMEOUT, f"AI provider timed out: {exc}"
            ) from exc
        except openai.RateLimitError as exc:
            raise UpstreamError(
                UpstreamErrorKind.RATE_LIMITED, f"AI provider rate limit exceeded: {exc}"
            ) from exc
        except (openai.APIConnectionError, httpx.ConnectError) as exc:
            raise UpstreamError(
                UpstreamErrorKind.SERVER_ERROR, f"AI provider network error: {exc}"
            ) from exc
        except openai.APIError as exc:
            raise UpstreamError(
                UpstreamErrorKind.SERVER_ERROR, f"AI provider API error: {exc}"
            ) from exc

        if not response.choices:
            raise UpstreamError(UpstreamErrorKind.MALFORMED, "AI returned no choices")
        content = response.choices[0].message.content
        if content is None or not content.strip():
            raise UpstreamError(UpstreamErrorKind.MALFORMED, "AI returned empty response")
        return content.strip()
