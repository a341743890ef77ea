"""Filesystem blob store for event images."""
import logging
import uuid
from pathlib import Path

from clubhouse.stores.interfaces import BlobStore, StoreError

logger = logging.getLogger(__name__)


class FilesystemBlobStore(BlobStore):
    """Confine blob files to ``base_dir`` and address them as ``<base_url>/<name>``."""

    def __init__(self, base_dir: Path, base_url: str = "/media") -> None:
        self._base_dir = Path(base_dir).resolve()
        self._base_url = base_url.rstrip("/")
        self._base_dir.mkdir(parents=True, exist_ok=True)

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def path_for(self, url: str) -> Path:
        """Return the file backing ``url``; raise StoreError for foreign URLs."""
        prefix = f"{self._base_url}/"
        if not url.startswith(prefix):
            raise StoreError(f"URL {url!r} is not managed by this blob store")
        candidate = (self._base_dir / url[len(prefix):]).resolve()
        try:
            candidate.relative_to(self._base_dir)
        except ValueError as exc:
            raise StoreError(f"URL {url!r} escapes the blob directory") from exc
        return candidate

    def put(self, data: bytes) -> str:
        name = uuid.uuid4().hex
        destination = self._base_dir / name
        try:
            destination.write_bytes(data)
        except OSError as exc:
            destination.unlink(missing_ok=True)
            raise StoreError("Failed to write blob") from exc
        logger.debug("Stored blob %s (%d bytes)", name, len(data))
        return f"{self._base_url}/{name}"

    def delete(self, url: str) -> None:
        path = self.path_for(url)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise StoreError(f"Failed to delete blob {url}") from exc
        logger.debug("Deleted blob %s", url)

    def owns(self, url: str) -> bool:
        try:
            self.path_for(url)
        except StoreError:
            return False
        return True

    def exists(self, url: str) -> bool:
        return self.owns(url) and self.path_for(url).is_file()
