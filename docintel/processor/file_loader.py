from pathlib import Path

from docintel.processor.exceptions import UnsupportedStorageDiskError
from docintel.processor.models import Document


class FileLoader:
    """Resolves filesystem path for a document and reads its bytes."""

    FILES_ROOT = Path("/app/files")

    def __init__(self, files_root: Path | None = None) -> None:
        self._files_root = files_root if files_root is not None else self.FILES_ROOT

    def load(self, document: Document) -> bytes:
        """Read document bytes from disk.

        Raises:
            FileNotFoundError: if the file does not exist at resolved path.
            UnsupportedStorageDiskError: if storage_disk is not 'local'.
        """
        if document.storage_disk != "local":
            raise UnsupportedStorageDiskError(
                f"storage_disk '{document.storage_disk}' is not supported"
            )
        path = self.resolve_path(document)
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        return path.read_bytes()

    def resolve_path(self, document: Document) -> Path:
        """{files_root}/{storage_path}; absolute storage paths are kept as-is."""
        storage_path = Path(document.storage_path)
        if storage_path.is_absolute():
            return storage_path
        return self._files_root / storage_path
