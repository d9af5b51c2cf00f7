from legal_ai.config.settings import Settings
from legal_ai.extraction.extractor import ContentExtractor
from legal_ai.pdf.base import BasePdfExtractor
from legal_ai.pdf.pdfplumber_adapter import PdfPlumberAdapter
from legal_ai.pdf.pymupdf_adapter import PyMuPdfAdapter
from legal_ai.storage.file_loader import FileLoader


class ContentExtractorFactory:
    """Builds the content extractor and its PDF engine from settings."""

    # "fitz" is PyMuPDF's historical import name and still shows up in configs.
    PDF_ENGINES: dict[str, type[BasePdfExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
        "fitz": PyMuPdfAdapter,
    }

    @classmethod
    def create_pdf_extractor(cls, engine: str) -> BasePdfExtractor:
        """Instantiate the PDF adapter registered under ``engine`` (case-insensitive).

        Raises:
            ValueError: if no adapter is registered under that name.
        """
        adapter_cls = cls.PDF_ENGINES.get(engine.strip().lower())
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {sorted(cls.PDF_ENGINES)}"
            )
        return adapter_cls()

    @classmethod
    def create(cls, settings: Settings, file_loader: FileLoader) -> ContentExtractor:
        return ContentExtractor(
            file_loader=file_loader,
            pdf_extractor=cls.create_pdf_extractor(settings.pdf_engine),
        )
