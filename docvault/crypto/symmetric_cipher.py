"""Per-document symmetric encryption.

AES-256-GCM with a random 96-bit nonce per encryption and no associated
data. The packed wire layout is ``nonce(12) || tag(16) || ciphertext``.
"""

import hashlib

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from docvault.crypto.exceptions import AuthenticationFailedError, MalformedPayloadError
from docvault.crypto.models import (
    GCM_NONCE_SIZE,
    GCM_TAG_SIZE,
    KEY_SIZE,
    EncryptedPayload,
    require_key_size,
)
from docvault.crypto.random_source import RandomSource, default_random_source

PACKED_HEADER_SIZE = GCM_NONCE_SIZE + GCM_TAG_SIZE


class SymmetricCipher:
    """Generates document keys and encrypts/decrypts document bytes."""

    def __init__(self, random_source: RandomSource | None = None) -> None:
        self._random = random_source if random_source is not None else default_random_source()

    def generate_document_key(self) -> bytes:
        return self._random.token_bytes(KEY_SIZE)

    def encrypt(self, plaintext: bytes, key: bytes) -> EncryptedPayload:
        """Encrypt *plaintext* under *key* with a fresh nonce.

        Raises:
            InvalidKeyLengthError: if key is not 32 bytes.
        """
        require_key_size(key, "document key")
        nonce = self._random.token_bytes(GCM_NONCE_SIZE)
        sealed = AESGCM(key).encrypt(nonce, plaintext, None)
        return EncryptedPayload(
            nonce=nonce,
            auth_tag=sealed[-GCM_TAG_SIZE:],
            ciphertext=sealed[:-GCM_TAG_SIZE],
        )

    def decrypt(self, payload: EncryptedPayload, key: bytes) -> bytes:
        """Verify and decrypt *payload*.

        Raises:
            InvalidKeyLengthError: if key is not 32 bytes.
            AuthenticationFailedError: if the tag does not verify.
        """
        require_key_size(key, "document key")
        try:
            return AESGCM(key).decrypt(
                payload.nonce, payload.ciphertext + payload.auth_tag, None
            )
        except InvalidTag as exc:
            raise AuthenticationFailedError(
                "Authentication failed: wrong key or corrupted ciphertext"
            ) from exc

    @staticmethod
    def pack(payload: EncryptedPayload) -> bytes:
        return payload.nonce + payload.auth_tag + payload.ciphertext

    @staticmethod
    def unpack(data: bytes) -> EncryptedPayload:
        """Split packed bytes into nonce, tag and ciphertext.

        Raises:
            MalformedPayloadError: if data is shorter than 28 bytes.
        """
        if len(data) < PACKED_HEADER_SIZE:
            raise MalformedPayloadError(
                f"Packed data too short: {len(data)} bytes "
                f"(minimum {PACKED_HEADER_SIZE} for nonce + tag)"
            )
        return EncryptedPayload(
            nonce=bytes(data[:GCM_NONCE_SIZE]),
            auth_tag=bytes(data[GCM_NONCE_SIZE:PACKED_HEADER_SIZE]),
            ciphertext=bytes(data[PACKED_HEADER_SIZE:]),
        )

    @staticmethod
    def hash(data: bytes) -> bytes:
        """SHA-256 content hash of the plaintext."""
        return hashlib.sha256(data).digest()

    @classmethod
    def hash_hex(cls, data: bytes) -> str:
        return cls.hash(data).hex()
