from pathlib import Path

import pytest

from docvault.config.settings import Settings


@pytest.fixture
def integration_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Settings:
    monkeypatch.setenv("STORAGE_PROVIDER", "local")
    monkeypatch.setenv("STORAGE_FILES_ROOT", str(tmp_path / "storage"))
    monkeypatch.setenv("STORAGE_GATEWAY_URL", "http://localhost:8080/ipfs")
    monkeypatch.setenv("METADATA_DIR", str(tmp_path / "metadata"))
    monkeypatch.setenv("KEYPAIR_PATH", str(tmp_path / "keys" / "owner.json"))
    return Settings(_env_file=None)
