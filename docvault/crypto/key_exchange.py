"""Identity key pairs and document-key wrapping.

Wrapping uses NaCl ``crypto_box`` (X25519 key agreement followed by
XSalsa20-Poly1305) between the sender's static identity secret key and
the recipient's public key. The sender identity is reused for every
share, so there is no forward secrecy: compromise of a sender secret
key exposes every document key that sender has wrapped.
"""

from nacl.exceptions import CryptoError as NaclCryptoError
from nacl.public import Box, PrivateKey, PublicKey

from docvault.crypto.exceptions import (
    InvalidEncodingError,
    InvalidSeedLengthError,
    UnwrapFailedError,
)
from docvault.crypto.models import (
    BOX_NONCE_SIZE,
    KEY_SIZE,
    IdentityKeyPair,
    WrappedKey,
    require_key_size,
)
from docvault.crypto.random_source import RandomSource, default_random_source


class KeyExchange:
    """Generates identity key pairs and wraps/unwraps document keys."""

    def __init__(self, random_source: RandomSource | None = None) -> None:
        self._random = random_source if random_source is not None else default_random_source()

    def generate_key_pair(self) -> IdentityKeyPair:
        return self._key_pair_from_secret(self._random.token_bytes(KEY_SIZE))

    def generate_key_pair_from_seed(self, seed: bytes) -> IdentityKeyPair:
        """Derive the identity whose X25519 secret key is *seed*.

        Raises:
            InvalidSeedLengthError: if seed is not 32 bytes.
        """
        if len(seed) != KEY_SIZE:
            raise InvalidSeedLengthError(f"Seed must be {KEY_SIZE} bytes, got {len(seed)}")
        return self._key_pair_from_secret(bytes(seed))

    def wrap(
        self,
        document_key: bytes,
        recipient_public_key: bytes,
        sender_key_pair: IdentityKeyPair,
    ) -> WrappedKey:
        """Seal *document_key* for the holder of *recipient_public_key*.

        Raises:
            InvalidKeyLengthError: if any key input is not 32 bytes.
            InvalidEncodingError: if the recipient key is not a usable
                curve point.
        """
        require_key_size(document_key, "document key")
        require_key_size(recipient_public_key, "recipient public key")
        require_key_size(sender_key_pair.secret_key, "sender secret key")

        try:
            box = Box(PrivateKey(sender_key_pair.secret_key), PublicKey(recipient_public_key))
        except NaclCryptoError as exc:
            raise InvalidEncodingError("Recipient public key is not a usable X25519 key") from exc

        nonce = self._random.token_bytes(BOX_NONCE_SIZE)
        sealed = box.encrypt(bytes(document_key), nonce)
        return WrappedKey(
            encrypted_key=bytes(sealed.ciphertext),
            nonce=nonce,
            sender_public_key=bytes(sender_key_pair.public_key),
        )

    def unwrap(self, wrapped_key: WrappedKey, recipient_secret_key: bytes) -> bytes:
        """Open *wrapped_key* with the caller's secret key.

        Raises:
            InvalidKeyLengthError: if recipient_secret_key is not 32 bytes.
            UnwrapFailedError: if the box does not verify. Callers must
                treat this as "access denied", not as a transient error.
        """
        require_key_size(recipient_secret_key, "recipient secret key")
        try:
            box = Box(PrivateKey(recipient_secret_key), PublicKey(wrapped_key.sender_public_key))
            document_key = box.decrypt(wrapped_key.encrypted_key, wrapped_key.nonce)
        except NaclCryptoError as exc:
            raise UnwrapFailedError(
                "Failed to unwrap document key: not a recipient or corrupted data"
            ) from exc
        if len(document_key) != KEY_SIZE:
            raise UnwrapFailedError("Unwrapped document key has an unexpected length")
        return bytes(document_key)

    @staticmethod
    def _key_pair_from_secret(secret: bytes) -> IdentityKeyPair:
        private_key = PrivateKey(secret)
        return IdentityKeyPair(
            public_key=bytes(private_key.public_key),
            secret_key=bytes(private_key),
        )
