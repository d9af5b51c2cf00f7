"""Offline completion client.

Returns canned responses without network calls. Useful for local
development and as a template for new provider adapters: implement
BaseCompletionClient and register the provider in CompletionClientFactory.
"""

import json
from typing import ClassVar

from legal_ai.analysis.client_base import BaseCompletionClient


class ExampleClientAdapter(BaseCompletionClient):
    DEFAULT_JSON_RESPONSE: ClassVar[dict[str, object]] = {
        "summary": "Example analysis generated without calling a model.",
        "recommendations": [],
    }
    DEFAULT_TEXT_RESPONSE: ClassVar[str] = "Example response generated without calling a model."

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
        _ = model, temperature, system_prompt, user_prompt, max_tokens
        if json_mode:
            return json.dumps(self.DEFAULT_JSON_RESPONSE)
        return self.DEFAULT_TEXT_RESPONSE
