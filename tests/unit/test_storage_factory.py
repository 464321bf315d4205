from pathlib import Path
from unittest.mock import Mock

import pytest

from docvault.config.settings import Settings
from docvault.storage.factory import StorageFactory
from docvault.storage.local_adapter import LocalDiskStorage


def _settings(provider: str = "local") -> Mock:
    settings = Mock(spec=Settings)
    settings.storage_provider = provider
    settings.storage_files_root = "/tmp/docvault-storage"
    settings.storage_gateway_url = "http://gw"
    return settings


class TestStorageFactory:
    def test_creates_local_storage(self) -> None:
        assert isinstance(StorageFactory.create(_settings()), LocalDiskStorage)

    def test_provider_is_case_insensitive(self) -> None:
        assert isinstance(StorageFactory.create(_settings("LOCAL")), LocalDiskStorage)

    def test_files_root_override(self, tmp_path: Path) -> None:
        storage = StorageFactory.create(_settings(), files_root=tmp_path)
        storage_id = storage.upload(b"x")
        assert (tmp_path / storage_id[:2] / storage_id).exists()

    def test_unknown_provider_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown storage provider 'ipfs'"):
            StorageFactory.create(_settings("ipfs"))
