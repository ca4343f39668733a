from docintel.config.settings import Settings
from docintel.extraction.base import BaseExtractor
from docintel.extraction.ocr_adapter import ScannedPdfOcrAdapter, TesseractOcrAdapter
from docintel.extraction.pdfplumber_adapter import PdfPlumberAdapter
from docintel.extraction.plain_text_adapter import PlainTextAdapter
from docintel.extraction.pymupdf_adapter import PyMuPdfAdapter
from docintel.extraction.text_extractor import TextExtractor


class ExtractorFactory:
    """Creates text extractors wired with the configured adapters."""

    PDF_ADAPTERS: dict[str, type[BaseExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create_pdf_extractor(cls, settings: Settings) -> BaseExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.PDF_ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.PDF_ADAPTERS)}"
            )
        return adapter_cls()

    @classmethod
    def create(cls, settings: Settings, *, allow_plain_text: bool = True) -> TextExtractor:
        """Build a TextExtractor.

        Knowledge-base documents accept plain text; scanned uploads are limited
        to PDFs and images, so the scanner passes allow_plain_text=False.
        """
        image_ocr = TesseractOcrAdapter(language=settings.ocr_language)
        return TextExtractor(
            pdf_extractor=cls.create_pdf_extractor(settings),
            image_extractor=image_ocr,
            plain_text_extractor=PlainTextAdapter() if allow_plain_text else None,
            scanned_pdf_extractor=ScannedPdfOcrAdapter(image_ocr),
        )
