import hashlib
import re
from pathlib import Path

from docvault.storage.base import BaseStorage
from docvault.storage.exceptions import StorageError, StorageObjectNotFoundError

_STORAGE_ID_RE = re.compile(r"^[0-9a-f]{64}$")


class LocalDiskStorage(BaseStorage):
    """Content-addressed store on the local filesystem.

    The storage id is the SHA-256 hex digest of the stored bytes, so
    identical ciphertexts share one object.
    """

    def __init__(self, files_root: Path | str, gateway_url: str) -> None:
        self._files_root = Path(files_root)
        self._gateway_url = gateway_url.rstrip("/")

    def upload(self, data: bytes, metadata: dict[str, str] | None = None) -> str:
        _ = metadata  # local objects carry no metadata
        storage_id = hashlib.sha256(data).hexdigest()
        path = self._resolve_path(storage_id)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            raise StorageError(f"Failed to store object {storage_id}: {exc}") from exc
        return storage_id

    def download(self, storage_id: str) -> bytes:
        path = self._resolve_path(storage_id)
        if not path.exists():
            raise StorageObjectNotFoundError(f"Object not found: {storage_id}")
        return path.read_bytes()

    def gateway_url(self, storage_id: str) -> str:
        return f"{self._gateway_url}/{storage_id}"

    def _resolve_path(self, storage_id: str) -> Path:
        if not _STORAGE_ID_RE.match(storage_id):
            raise StorageObjectNotFoundError(f"Invalid storage id: {storage_id!r}")
        return self._files_root / storage_id[:2] / storage_id
