"""Tolerant parsing of model output.

Three stages, each usable on its own: strict JSON decoding, recovery of
the first balanced ``{...}`` span, and finally wrapping the raw text.
``parse_result`` never raises.
"""

import json
from typing import Any

from legal_ai.analysis.kinds import ANALYSIS_PROFILES, AnalysisKind

FALLBACK_KEY = "analysis"

# Candidate spans tried before giving up and wrapping the raw text.
MAX_EMBEDDED_ATTEMPTS = 32


def strip_code_fence(raw: str) -> str:
    cleaned = raw.strip()
    if cleaned.startswith("```"):
        lines = cleaned.splitlines()
        if lines and lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines)
    return cleaned


def parse_strict(raw: str) -> dict[str, Any] | None:
    """Decode ``raw`` (optionally fenced) as a JSON object, or return None."""
    try:
        parsed = json.loads(strip_code_fence(raw))
    except (ValueError, RecursionError):
        return None
    return parsed if isinstance(parsed, dict) else None


def balanced_spans(text: str) -> list[tuple[int, int]]:
    """Offsets of every balanced ``{...}`` span, ordered by start.

    Single pass with a stack of open-brace offsets. Braces inside JSON
    strings are ignored and unclosed braces simply never yield a span.
    """
    spans: list[tuple[int, int]] = []
    opened: list[int] = []
    in_string = False
    escaped = False
    for index, char in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"' and opened:
            in_string = True
        elif char == "{":
            opened.append(index)
        elif char == "}" and opened:
            spans.append((opened.pop(), index + 1))
    spans.sort()
    return spans


def find_balanced_object(text: str) -> str | None:
    """Return the first balanced ``{...}`` span, honouring JSON string escapes."""
    spans = balanced_spans(text)
    if not spans:
        return None
    start, end = spans[0]
    return text[start:end]


def parse_embedded(raw: str) -> dict[str, Any] | None:
    """Parse the first decodable balanced object found inside surrounding prose."""
    for start, end in balanced_spans(raw)[:MAX_EMBEDDED_ATTEMPTS]:
        parsed = parse_strict(raw[start:end])
        if parsed is not None:
            return parsed
    return None


def wrap_raw(raw: str, key: str = FALLBACK_KEY) -> dict[str, Any]:
    return {key: raw}


def parse_result(raw: str, kind: AnalysisKind) -> dict[str, Any]:
    """Turn a model response into a JSON-serializable dict for ``kind``.

    Free-text kinds are wrapped under their text key. Structured kinds go
    through strict parsing, then embedded-object recovery, then fall back
    to ``{"analysis": raw}``.
    """
    profile = ANALYSIS_PROFILES[kind]
    if not profile.structured:
        return wrap_raw(raw.strip(), profile.text_key)
    parsed = parse_strict(raw)
    if parsed is None:
        parsed = parse_embedded(raw)
    if parsed is None:
        return wrap_raw(raw)
    return parsed
