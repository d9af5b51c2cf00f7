from legal_ai.analysis.client_base import BaseCompletionClient
from legal_ai.analysis.kinds import AnalysisProfile
from legal_ai.analysis.prompt_builder import Prompt
from legal_ai.logging.logger import Log


class CompletionService:
    """Sends prompts to the completion client with each kind's generation budget."""

    def __init__(self, *, client: BaseCompletionClient, model: str) -> None:
        self._client = client
        self._model = model

    def complete(self, prompt: Prompt, profile: AnalysisProfile) -> str:
        Log.debug(f"{profile.kind.value} prompt:\n{prompt.user_prompt}")
        raw = self._client.complete(
            model=self._model,
            temperature=profile.temperature,
            system_prompt=prompt.system_prompt,
            user_prompt=prompt.user_prompt,
            max_tokens=profile.max_tokens,
            json_mode=profile.structured,
        )
        Log.debug(f"{profile.kind.value} raw response:\n{raw}")
        return raw
