from dataclasses import dataclass, field

from docvault.crypto.exceptions import InvalidKeyLengthError, MalformedPayloadError

KEY_SIZE = 32
GCM_NONCE_SIZE = 12
GCM_TAG_SIZE = 16
BOX_NONCE_SIZE = 24
BOX_MAC_SIZE = 16
WRAPPED_KEY_SIZE = KEY_SIZE + BOX_MAC_SIZE


@dataclass(frozen=True)
class EncryptedPayload:
    """AES-256-GCM output split into its wire fields."""

    nonce: bytes
    auth_tag: bytes
    ciphertext: bytes

    def __post_init__(self) -> None:
        if len(self.nonce) != GCM_NONCE_SIZE:
            raise MalformedPayloadError(
                f"nonce must be {GCM_NONCE_SIZE} bytes, got {len(self.nonce)}"
            )
        if len(self.auth_tag) != GCM_TAG_SIZE:
            raise MalformedPayloadError(
                f"auth tag must be {GCM_TAG_SIZE} bytes, got {len(self.auth_tag)}"
            )


@dataclass(frozen=True)
class IdentityKeyPair:
    """Long-lived X25519 identity. The secret key never appears in repr()."""

    public_key: bytes
    secret_key: bytes = field(repr=False)


@dataclass(frozen=True)
class WrappedKey:
    """A document key sealed for one recipient with ``crypto_box``."""

    encrypted_key: bytes
    nonce: bytes
    sender_public_key: bytes

    def __post_init__(self) -> None:
        expected = (
            ("encrypted key", self.encrypted_key, WRAPPED_KEY_SIZE),
            ("nonce", self.nonce, BOX_NONCE_SIZE),
            ("sender public key", self.sender_public_key, KEY_SIZE),
        )
        for name, value, size in expected:
            if len(value) != size:
                raise MalformedPayloadError(
                    f"{name} must be {size} bytes, got {len(value)}"
                )


def require_key_size(key: bytes, name: str = "key") -> None:
    """Raise InvalidKeyLengthError unless *key* is exactly 32 bytes."""
    if len(key) != KEY_SIZE:
        raise InvalidKeyLengthError(f"{name} must be {KEY_SIZE} bytes, got {len(key)}")
