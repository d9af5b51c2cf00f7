import pymupdf

from legal_ai.pdf.base import BasePdfExtractor
from legal_ai.pdf.exceptions import PdfEncryptedError, PdfExtractionError


class PyMuPdfAdapter(BasePdfExtractor):
    """Extracts text from PDF using PyMuPDF."""

    def extract(self, pdf_bytes: bytes) -> str:
        try:
            doc = pymupdf.open(stream=pdf_bytes, filetype="pdf")  # type: ignore[no-untyped-call]
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf could not open document: {exc}") from exc
        with doc:
            if doc.needs_pass:
                raise PdfEncryptedError("PDF is password protected")
            try:
                pages = [page.get_text() for page in doc]
            except Exception as exc:
                raise PdfExtractionError(f"pymupdf extraction failed: {exc}") from exc
        return "\n".join(pages).strip()
