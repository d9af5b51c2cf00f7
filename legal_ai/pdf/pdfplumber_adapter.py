import io

import pdfplumber
from pdfminer.pdfdocument import PDFPasswordIncorrect

from legal_ai.pdf.base import BasePdfExtractor
from legal_ai.pdf.exceptions import PdfEncryptedError, PdfExtractionError


def _is_password_error(exc: BaseException) -> bool:
    # Newer pdfplumber releases wrap pdfminer errors; look through the wrapper.
    candidates = [exc, exc.__cause__, exc.__context__, *exc.args]
    return any(isinstance(c, PDFPasswordIncorrect) for c in candidates)


class PdfPlumberAdapter(BasePdfExtractor):
    """Extracts text from PDF using pdfplumber."""

    def extract(self, pdf_bytes: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
        except Exception as exc:
            if _is_password_error(exc):
                raise PdfEncryptedError("PDF is password protected") from exc
            raise PdfExtractionError(f"pdfplumber extraction failed: {exc}") from exc
        return "\n".join(pages).strip()
