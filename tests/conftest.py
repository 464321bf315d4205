import hashlib

import pytest

from docvault.crypto.key_exchange import KeyExchange
from docvault.crypto.models import IdentityKeyPair
from docvault.crypto.random_source import RandomSource
from docvault.crypto.symmetric_cipher import SymmetricCipher
from docvault.records.assembler import DocumentRecordAssembler


class SeededRandomSource(RandomSource):
    """Deterministic byte stream for reproducible tests. Never use in production."""

    def __init__(self, seed: bytes = b"docvault-tests") -> None:
        self._seed = seed
        self._counter = 0

    def token_bytes(self, n: int) -> bytes:
        out = bytearray()
        while len(out) < n:
            block = hashlib.sha256(self._seed + self._counter.to_bytes(8, "big")).digest()
            out.extend(block)
            self._counter += 1
        return bytes(out[:n])


@pytest.fixture()
def seeded_random() -> SeededRandomSource:
    return SeededRandomSource()


@pytest.fixture()
def cipher() -> SymmetricCipher:
    return SymmetricCipher()


@pytest.fixture()
def key_exchange() -> KeyExchange:
    return KeyExchange()


@pytest.fixture()
def assembler() -> DocumentRecordAssembler:
    return DocumentRecordAssembler()


@pytest.fixture()
def alice(key_exchange: KeyExchange) -> IdentityKeyPair:
    return key_exchange.generate_key_pair()


@pytest.fixture()
def bob(key_exchange: KeyExchange) -> IdentityKeyPair:
    return key_exchange.generate_key_pair()


@pytest.fixture()
def mallory(key_exchange: KeyExchange) -> IdentityKeyPair:
    return key_exchange.generate_key_pair()


@pytest.fixture()
def make_seeded_random() -> type[SeededRandomSource]:
    return SeededRandomSource
