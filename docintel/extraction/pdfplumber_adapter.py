import io

import pdfplumber

from docintel.extraction.base import BaseExtractor
from docintel.extraction.exceptions import ExtractionError


class PdfPlumberAdapter(BaseExtractor):
    """Extracts text from PDF using pdfplumber."""

    def extract(self, data: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(data)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
        except Exception as exc:
            raise ExtractionError(f"pdfplumber extraction failed: {exc}") from exc
        return "\n".join(pages).strip()
