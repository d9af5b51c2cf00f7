"""Converts stored documents into plain text for prompting.

Format problems never raise: unsupported and corrupted files produce a
descriptive placeholder text so the caller can still respond with
something useful. A missing storage object becomes SOURCE_UNAVAILABLE; every
other storage failure propagates.
"""

import re

from legal_ai.extraction.models import (
    ExtractedContent,
    ExtractionOutcome,
    SourceDocument,
    SourceKind,
)
from legal_ai.extraction.source_kind import classify_source
from legal_ai.logging.logger import Log
from legal_ai.pdf.base import BasePdfExtractor
from legal_ai.pdf.exceptions import PdfEncryptedError, PdfExtractionError
from legal_ai.storage.exceptions import ObjectNotFoundError
from legal_ai.storage.file_loader import FileLoader

_BLANK_LINE_RUN = re.compile(r"\n\s*\n")

WORD_PLACEHOLDER = (
    "[Word document content extraction is not supported. "
    "Please convert the document to PDF for AI analysis.]"
)
IMAGE_PLACEHOLDER = (
    "[Image file detected. Text extraction from images (OCR) is not supported. "
    "Please provide a text-based document for AI analysis.]"
)
NO_TEXT_LAYER_PLACEHOLDER = (
    "[The PDF contains no extractable text layer (it may be a scanned image). "
    "OCR is not supported. Please provide a text-based PDF for AI analysis.]"
)


def collapse_blank_lines(text: str) -> str:
    """Replace every run of blank lines with a single newline."""
    return _BLANK_LINE_RUN.sub("\n", text)


class ContentExtractor:
    """Produces ExtractedContent for a SourceDocument or raw uploaded bytes."""

    def __init__(self, file_loader: FileLoader, pdf_extractor: BasePdfExtractor) -> None:
        self._file_loader = file_loader
        self._pdf_extractor = pdf_extractor

    def extract(self, document: SourceDocument) -> ExtractedContent:
        """Extract text for a stored document.

        Raises:
            StorageTimeoutError: if fetching the file timed out.
            StorageError: on any other storage failure (access denied, connection errors).
        """
        if not self._file_loader.has_file(document):
            if document.text_content:
                return ExtractedContent(
                    text=document.text_content, outcome=ExtractionOutcome.SUCCEEDED
                )
            return self._unavailable(
                f"Document {document.id} has no file path, object-storage location "
                "or stored text"
            )

        try:
            data = self._file_loader.load(document)
        except ObjectNotFoundError as exc:
            return self._unavailable(str(exc))

        content = self.extract_bytes(
            data,
            mime_type=document.mime_type,
            original_name=document.original_name,
            size_bytes=document.file_size_bytes,
        )
        Log.info(
            "Extracted document content",
            document=document.id,
            outcome=content.outcome.value,
            chars=len(content.text),
        )
        return content

    def extract_bytes(
        self,
        data: bytes,
        *,
        mime_type: str,
        original_name: str,
        size_bytes: int | None = None,
    ) -> ExtractedContent:
        """Extract text from in-memory file bytes by dispatching on SourceKind."""
        extension = original_name.rsplit(".", 1)[-1] if "." in original_name else ""
        kind = classify_source(mime_type, extension)
        size = size_bytes if size_bytes is not None else len(data)

        if kind is SourceKind.PDF:
            return self._extract_pdf(data, mime_type, original_name, size)
        if kind is SourceKind.PLAIN_TEXT:
            return ExtractedContent(
                text=data.decode("utf-8", errors="replace"),
                outcome=ExtractionOutcome.SUCCEEDED,
            )
        if kind is SourceKind.WORD:
            return self._unsupported(WORD_PLACEHOLDER)
        if kind is SourceKind.IMAGE:
            return self._unsupported(IMAGE_PLACEHOLDER)
        label = extension or mime_type or "unknown"
        return self._unsupported(
            f"[File type {label} is not supported for content extraction. "
            "Please convert to PDF or text format for AI analysis.]"
        )

    def _extract_pdf(
        self,
        data: bytes,
        mime_type: str,
        original_name: str,
        size_bytes: int,
    ) -> ExtractedContent:
        try:
            text = self._pdf_extractor.extract(data)
        except PdfExtractionError as exc:
            return self._corrupted(exc, mime_type, original_name, size_bytes)

        text = collapse_blank_lines(text)
        if not text.strip():
            return self._unsupported(NO_TEXT_LAYER_PLACEHOLDER)
        return ExtractedContent(text=text, outcome=ExtractionOutcome.SUCCEEDED)

    @staticmethod
    def _corrupted(
        exc: Exception,
        mime_type: str,
        original_name: str,
        size_bytes: int,
    ) -> ExtractedContent:
        Log.warning(f"PDF extraction failed for {original_name}: {exc}")
        reason = (
            "The document is password protected."
            if isinstance(exc, PdfEncryptedError)
            else "The document may be corrupted, generated by incompatible software "
            "or use unsupported PDF features."
        )
        text = (
            f"[PDF Content Extraction Failed] The PDF has structural issues ({exc}).\n"
            f"{reason}\n"
            "Please try re-uploading the document.\n"
            "Document details:\n"
            f"- Filename: {original_name}\n"
            f"- Size: {size_bytes} bytes\n"
            f"- MIME Type: {mime_type}"
        )
        return ExtractedContent(text=text, outcome=ExtractionOutcome.CORRUPTED, message=str(exc))

    @staticmethod
    def _unsupported(placeholder: str) -> ExtractedContent:
        return ExtractedContent(
            text=placeholder,
            outcome=ExtractionOutcome.UNSUPPORTED_FORMAT,
            message=placeholder.strip("[]"),
        )

    @staticmethod
    def _unavailable(message: str) -> ExtractedContent:
        Log.warning(f"Source unavailable: {message}")
        return ExtractedContent(
            text="", outcome=ExtractionOutcome.SOURCE_UNAVAILABLE, message=message
        )
