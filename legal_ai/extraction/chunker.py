DEFAULT_CHUNK_CHARS = 12000


def chunk_text(text: str, max_chunk_chars: int = DEFAULT_CHUNK_CHARS) -> list[str]:
    """Split text into contiguous, non-overlapping windows of ``max_chunk_chars``.

    Joining the chunks reproduces ``text`` exactly. Text no longer than the
    budget (including the empty string) yields a single chunk.
    """
    if max_chunk_chars <= 0:
        raise ValueError("max_chunk_chars must be positive")
    if len(text) <= max_chunk_chars:
        return [text]
    return [text[start:start + max_chunk_chars] for start in range(0, len(text), max_chunk_chars)]
