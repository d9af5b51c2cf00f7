class PdfExtractionError(Exception):
    """Raised when text cannot be extracted from PDF bytes."""


class PdfEncryptedError(PdfExtractionError):
    """Raised when a PDF is password protected."""
