"""Builds deterministic (system, user) prompt pairs per analysis kind."""

from dataclasses import dataclass
from pathlib import Path

from legal_ai.analysis.exceptions import AnalysisError
from legal_ai.analysis.kinds import (
    ANALYSIS_PROFILES,
    SUMMARY_MERGE_PROMPT_NAME,
    AnalysisKind,
)
from legal_ai.analysis.prompt_loader import load_prompt_template

DEFAULT_MAX_CONTENT_CHARS = 8000


@dataclass(frozen=True)
class Prompt:
    system_prompt: str
    user_prompt: str


def truncation_notice(limit: int) -> str:
    return (
        "\n\n[Content truncated due to length. "
        f"Only the first {limit} characters are shown.]"
    )


def truncate_content(content: str, limit: int) -> str:
    """Cut ``content`` to ``limit`` characters, appending a notice when cut."""
    if len(content) <= limit:
        return content
    return content[:limit] + truncation_notice(limit)


class PromptBuilder:
    """Renders prompt templates for every analysis kind.

    Templates are read once at construction; rendering is a pure function
    of (kind, content, params).
    """

    def __init__(
        self,
        *,
        max_content_chars: int = DEFAULT_MAX_CONTENT_CHARS,
        summary_chunk_chars: int | None = None,
        prompt_dir: Path | None = None,
    ) -> None:
        self._max_content_chars = max_content_chars
        # Summarization input is already bounded by the chunker.
        self._summary_chunk_chars = summary_chunk_chars or max_content_chars
        names = [p.prompt_name for p in ANALYSIS_PROFILES.values()]
        names.append(SUMMARY_MERGE_PROMPT_NAME)
        self._templates = {
            name: (
                load_prompt_template(name, "system", prompt_dir),
                load_prompt_template(name, "user", prompt_dir),
            )
            for name in names
        }

    def content_limit(self, kind: AnalysisKind) -> int:
        if kind is AnalysisKind.SUMMARIZATION:
            return self._summary_chunk_chars
        return self._max_content_chars

    def build(
        self,
        kind: AnalysisKind,
        content: str,
        *,
        document_name: str = "",
        question: str = "",
    ) -> Prompt:
        """Build the prompt pair for ``kind`` with truncated ``content``."""
        profile = ANALYSIS_PROFILES[kind]
        return self._render(
            profile.prompt_name,
            truncate_content(content, self.content_limit(kind)),
            document_name=document_name,
            question=question,
        )

    def build_summary_merge(self, partial_summaries: list[str]) -> Prompt:
        combined = "\n\n".join(partial_summaries)
        return self._render(
            SUMMARY_MERGE_PROMPT_NAME,
            truncate_content(combined, self._summary_chunk_chars),
        )

    def _render(
        self,
        name: str,
        content: str,
        *,
        document_name: str = "",
        question: str = "",
    ) -> Prompt:
        system_template, user_template = self._templates[name]
        try:
            user_prompt = user_template.format(
                content=content,
                document_name=document_name or "untitled document",
                question=question,
            )
        except (KeyError, IndexError, ValueError) as exc:
            raise AnalysisError(f"Prompt template '{name}' has an unknown placeholder: {exc}") from exc
        return Prompt(system_prompt=system_template, user_prompt=user_prompt)
