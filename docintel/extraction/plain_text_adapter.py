from docintel.extraction.base import BaseExtractor
from docintel.extraction.exceptions import ExtractionError


class PlainTextAdapter(BaseExtractor):
    """Decodes UTF-8 text and markdown files, normalizing line endings."""

    def extract(self, data: bytes) -> str:
        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ExtractionError(f"File is not valid UTF-8 text: {exc}") from exc
        return text.replace("\r\n", "\n").replace("\r", "\n").strip()
