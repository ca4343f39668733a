from pathlib import Path

from docintel.extraction.base import BaseExtractor
from docintel.extraction.exceptions import ExtractionError, UnsupportedMimeTypeError
from docintel.logging.logger import Log

PDF_MIME_TYPE = "application/pdf"
PLAIN_TEXT_MIME_TYPES = frozenset({"text/plain", "text/markdown", "text/x-markdown"})


class TextExtractor:
    """Routes a file to the adapter that handles its MIME type."""

    def __init__(
        self,
        *,
        pdf_extractor: BaseExtractor,
        image_extractor: BaseExtractor,
        plain_text_extractor: BaseExtractor | None = None,
        scanned_pdf_extractor: BaseExtractor | None = None,
    ) -> None:
        self._pdf_extractor = pdf_extractor
        self._image_extractor = image_extractor
        self._plain_text_extractor = plain_text_extractor
        self._scanned_pdf_extractor = scanned_pdf_extractor

    def extract(self, data: bytes, mime_type: str) -> str:
        """Extract text from in-memory file content.

        A PDF without a text layer is passed to the scanned PDF extractor
        when one is configured.

        Raises:
            UnsupportedMimeTypeError: if no adapter handles mime_type.
            ExtractionError: if the adapter fails.
        """
        adapter = self._adapter_for(mime_type)
        text = adapter.extract(data)
        if not text and adapter is self._pdf_extractor and self._scanned_pdf_extractor:
            Log.info("PDF has no text layer, falling back to OCR")
            adapter = self._scanned_pdf_extractor
            text = adapter.extract(data)
        Log.debug(f"{type(adapter).__name__} extracted {len(text)} chars ({mime_type})")
        return text

    def extract_file(self, path: Path, mime_type: str) -> str:
        """Read a file from disk and extract its text."""
        self._adapter_for(mime_type)
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise ExtractionError(f"Cannot read {path}: {exc}") from exc
        return self.extract(data, mime_type)

    def _adapter_for(self, mime_type: str) -> BaseExtractor:
        normalized = mime_type.split(";", 1)[0].strip().lower()
        if normalized == PDF_MIME_TYPE:
            return self._pdf_extractor
        if normalized.startswith("image/"):
            return self._image_extractor
        if self._plain_text_extractor is not None and normalized in PLAIN_TEXT_MIME_TYPES:
            return self._plain_text_extractor
        raise UnsupportedMimeTypeError(f"Unsupported file type: {mime_type}")
