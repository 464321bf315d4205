import os
from pathlib import Path

from pydantic import ValidationError

from docvault.crypto.exceptions import InvalidEncodingError
from docvault.crypto.key_exchange import KeyExchange
from docvault.crypto.models import IdentityKeyPair
from docvault.logging.logger import Log
from docvault.records.schemas import KeyPairFile
from docvault.repositories.exceptions import CorruptRecordError, KeyPairNotFoundError


class KeyPairRepository:
    """Reads and writes the local identity key-pair JSON file."""

    FILE_MODE = 0o600

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def load(self) -> IdentityKeyPair:
        """Load the key pair.

        Raises:
            KeyPairNotFoundError: if the file does not exist.
            CorruptRecordError: if the file is not a valid key-pair record.
        """
        if not self._path.exists():
            raise KeyPairNotFoundError(f"Keypair file not found: {self._path}")
        with self._path.open("r", encoding="utf-8") as fh:
            content = fh.read()
        try:
            return KeyPairFile.model_validate_json(content).to_domain()
        except (ValidationError, InvalidEncodingError) as exc:
            raise CorruptRecordError(f"Invalid keypair file: {self._path}") from exc

    def save(self, key_pair: IdentityKeyPair) -> None:
        """Write the key pair, readable by the current user only."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = KeyPairFile.from_domain(key_pair).model_dump_json(indent=2)
        fd = os.open(self._path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, self.FILE_MODE)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(payload)
        os.chmod(self._path, self.FILE_MODE)
        Log.info(f"Saved keypair to {self._path}")

    def get_or_create(self, key_exchange: KeyExchange) -> IdentityKeyPair:
        if self._path.exists():
            return self.load()
        key_pair = key_exchange.generate_key_pair()
        self.save(key_pair)
        return key_pair
