from pathlib import Path

from docvault.config.settings import Settings
from docvault.storage.base import BaseStorage
from docvault.storage.local_adapter import LocalDiskStorage


class StorageFactory:
    """Creates the configured storage adapter."""

    PROVIDERS: tuple[str, ...] = ("local",)

    @classmethod
    def create(cls, settings: Settings, files_root: Path | None = None) -> BaseStorage:
        provider = settings.storage_provider.lower()
        if provider == "local":
            root = files_root if files_root is not None else Path(settings.storage_files_root)
            return LocalDiskStorage(files_root=root, gateway_url=settings.storage_gateway_url)
        raise ValueError(
            f"Unknown storage provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
