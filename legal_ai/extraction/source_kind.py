from legal_ai.extraction.models import SourceKind

_PDF_EXTENSIONS = frozenset({"pdf"})
_TEXT_EXTENSIONS = frozenset({"txt", "md", "markdown"})
_WORD_EXTENSIONS = frozenset({"doc", "docx", "odt", "rtf"})
_IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "gif", "webp", "tif", "tiff", "bmp"})

_TEXT_MIME_TYPES = frozenset({"text/plain", "text/markdown", "text/x-markdown"})


def classify_source(mime_type: str, extension: str = "") -> SourceKind:
    """Derive the SourceKind from a MIME type, falling back to the file extension.

    The MIME type wins when it is specific; generic types such as
    ``application/octet-stream`` defer to the extension.
    """
    mime = (mime_type or "").split(";")[0].strip().lower()
    ext = (extension or "").lower().lstrip(".")

    if mime == "application/pdf":
        return SourceKind.PDF
    if mime in _TEXT_MIME_TYPES:
        return SourceKind.PLAIN_TEXT
    if "wordprocessingml" in mime or mime == "application/msword":
        return SourceKind.WORD
    if mime.startswith("image/"):
        return SourceKind.IMAGE

    if ext in _PDF_EXTENSIONS:
        return SourceKind.PDF
    if ext in _TEXT_EXTENSIONS:
        return SourceKind.PLAIN_TEXT
    if ext in _WORD_EXTENSIONS:
        return SourceKind.WORD
    if ext in _IMAGE_EXTENSIONS:
        return SourceKind.IMAGE
    return SourceKind.OTHER
