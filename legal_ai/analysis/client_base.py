from abc import ABC, abstractmethod


class BaseCompletionClient(ABC):
    """Contract for provider-specific chat completion clients."""

    @abstractmethod
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
        """Return the provider's response as plain text.

        Raises:
            UpstreamError: on timeout, rate limiting, server failure or an
                empty/malformed response envelope.
        """
