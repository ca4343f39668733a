import io

import pymupdf
import pytesseract
from PIL import Image, UnidentifiedImageError

from docintel.extraction.base import BaseExtractor
from docintel.extraction.exceptions import ExtractionError
from docintel.logging.logger import Log


class TesseractOcrAdapter(BaseExtractor):
    """Extracts text from document photos and scans using Tesseract OCR."""

    def __init__(self, language: str = "por") -> None:
        self._language = language

    def extract(self, data: bytes) -> str:
        try:
            with Image.open(io.BytesIO(data)) as image:
                text = pytesseract.image_to_string(image, lang=self._language)
        except UnidentifiedImageError as exc:
            raise ExtractionError(f"Unreadable image: {exc}") from exc
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError) as exc:
            raise ExtractionError(f"OCR extraction failed: {exc}") from exc
        Log.debug(f"OCR ({self._language}) produced {len(text)} chars")
        return text.strip()


class ScannedPdfOcrAdapter(BaseExtractor):
    """OCR for PDFs without a text layer: each page is rendered, then read."""

    def __init__(self, image_ocr: TesseractOcrAdapter, dpi: int = 300) -> None:
        self._image_ocr = image_ocr
        self._dpi = dpi

    def extract(self, data: bytes) -> str:
        try:
            with pymupdf.open(stream=data, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                images = [page.get_pixmap(dpi=self._dpi).tobytes("png") for page in doc]
        except Exception as exc:
            raise ExtractionError(f"PDF page rendering failed: {exc}") from exc

        pages = [self._image_ocr.extract(image) for image in images]
        Log.debug(f"OCR read {len(images)} rendered PDF pages")
        return "\n".join(page for page in pages if page).strip()
