from abc import ABC, abstractmethod


class BaseStorage(ABC):
    """Contract for content-addressed ciphertext storage adapters."""

    @abstractmethod
    def upload(self, data: bytes, metadata: dict[str, str] | None = None) -> str:
        """Store *data* and return its storage id.

        Raises:
            StorageError: if the data cannot be stored.
        """

    @abstractmethod
    def download(self, storage_id: str) -> bytes:
        """Return the bytes stored under *storage_id*.

        Raises:
            StorageObjectNotFoundError: if nothing is stored under the id.
        """

    @abstractmethod
    def gateway_url(self, storage_id: str) -> str:
        """Public URL at which *storage_id* can be fetched."""
