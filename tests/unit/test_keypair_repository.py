import json
import os
import stat
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from docvault.crypto.key_exchange import KeyExchange
from docvault.crypto.models import IdentityKeyPair
from docvault.repositories.exceptions import CorruptRecordError, KeyPairNotFoundError
from docvault.repositories.keypair_repository import KeyPairRepository


class TestSaveAndLoad:
    def test_round_trip(self, tmp_path: Path, alice: IdentityKeyPair) -> None:
        repo = KeyPairRepository(tmp_path / "keys.json")
        repo.save(alice)
        assert repo.load() == alice

    def test_file_layout(self, tmp_path: Path, alice: IdentityKeyPair) -> None:
        path = tmp_path / "keys.json"
        KeyPairRepository(path).save(alice)
        data = json.loads(path.read_text())
        assert data == {"publicKey": alice.public_key.hex(), "secretKey": alice.secret_key.hex()}

    def test_creates_parent_directories(self, tmp_path: Path, alice: IdentityKeyPair) -> None:
        path = tmp_path / "nested" / "dir" / "keys.json"
        KeyPairRepository(path).save(alice)
        assert path.exists()

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_file_is_owner_only(self, tmp_path: Path, alice: IdentityKeyPair) -> None:
        path = tmp_path / "keys.json"
        KeyPairRepository(path).save(alice)
        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_overwrites_existing_file(
        self, tmp_path: Path, alice: IdentityKeyPair, bob: IdentityKeyPair
    ) -> None:
        repo = KeyPairRepository(tmp_path / "keys.json")
        repo.save(alice)
        repo.save(bob)
        assert repo.load() == bob


class TestLoadErrors:
    def test_missing_file(self, tmp_path: Path) -> None:
        repo = KeyPairRepository(tmp_path / "missing.json")
        assert repo.exists() is False
        with pytest.raises(KeyPairNotFoundError, match="missing.json"):
            repo.load()

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "keys.json"
        path.write_text("not json")
        with pytest.raises(CorruptRecordError):
            KeyPairRepository(path).load()

    def test_mismatched_keys(
        self, tmp_path: Path, alice: IdentityKeyPair, bob: IdentityKeyPair
    ) -> None:
        path = tmp_path / "keys.json"
        path.write_text(
            json.dumps({"publicKey": bob.public_key.hex(), "secretKey": alice.secret_key.hex()})
        )
        with pytest.raises(CorruptRecordError):
            KeyPairRepository(path).load()


class TestGetOrCreate:
    def test_creates_when_missing(self, tmp_path: Path, key_exchange: KeyExchange) -> None:
        repo = KeyPairRepository(tmp_path / "keys.json")
        created = repo.get_or_create(key_exchange)
        assert repo.exists()
        assert repo.load() == created

    def test_returns_existing_without_generating(
        self, tmp_path: Path, alice: IdentityKeyPair
    ) -> None:
        repo = KeyPairRepository(tmp_path / "keys.json")
        repo.save(alice)
        key_exchange = MagicMock(spec=KeyExchange)
        assert repo.get_or_create(key_exchange) == alice
        key_exchange.generate_key_pair.assert_not_called()
