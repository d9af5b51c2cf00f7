from pathlib import Path

from legal_ai.analysis.exceptions import AnalysisError

DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(name: str, part: str, prompt_dir: Path | None = None) -> str:
    """Load one part ("system" or "user") of a named prompt.

    Args:
        name: Prompt name, e.g. "clause_extraction".
        part: "system" or "user".
        prompt_dir: Directory holding ``{name}.{part}.txt`` files.
                    Defaults to the bundled prompts directory.

    Raises:
        AnalysisError: if the file cannot be read.
    """
    path = (prompt_dir or DEFAULT_PROMPT_DIR) / f"{name}.{part}.txt"
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise AnalysisError(f"Failed to load prompt template {path.name}: {exc}") from exc
