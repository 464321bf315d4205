"""Lowercase hex presentation of 32-byte keys and commitments."""

from nacl.public import PrivateKey

from docvault.crypto.exceptions import InvalidEncodingError
from docvault.crypto.models import KEY_SIZE, IdentityKeyPair

HEX_KEY_LENGTH = KEY_SIZE * 2


def key_from_hex(text: str, name: str = "key") -> bytes:
    """Decode a 64-character hex string into 32 bytes.

    Raises:
        InvalidEncodingError: if text is not valid hex of exactly 32 bytes.
    """
    if not isinstance(text, str) or len(text) != HEX_KEY_LENGTH:
        raise InvalidEncodingError(
            f"Invalid {name}: must be {HEX_KEY_LENGTH} hex characters ({KEY_SIZE} bytes)"
        )
    try:
        raw = bytes.fromhex(text)
    except ValueError as exc:
        raise InvalidEncodingError(f"Invalid {name}: not a hex string") from exc
    if len(raw) != KEY_SIZE:
        raise InvalidEncodingError(f"Invalid {name}: decodes to {len(raw)} bytes")
    return raw


def parse_public_key_hex(text: str) -> bytes:
    return key_from_hex(text.strip(), "public key")


def public_key_to_hex(key: bytes | IdentityKeyPair) -> str:
    raw = key.public_key if isinstance(key, IdentityKeyPair) else key
    if len(raw) != KEY_SIZE:
        raise InvalidEncodingError(f"Public key must be {KEY_SIZE} bytes, got {len(raw)}")
    return bytes(raw).hex()


def key_pair_to_hex(key_pair: IdentityKeyPair) -> tuple[str, str]:
    return key_pair.public_key.hex(), key_pair.secret_key.hex()


def key_pair_from_hex(public_hex: str, secret_hex: str) -> IdentityKeyPair:
    """Rebuild a key pair from its hex halves.

    Raises:
        InvalidEncodingError: on malformed hex, or when the public key is
            not the one derived from the secret key.
    """
    public_key = key_from_hex(public_hex, "public key")
    secret_key = key_from_hex(secret_hex, "secret key")
    if bytes(PrivateKey(secret_key).public_key) != public_key:
        raise InvalidEncodingError("Public key does not match secret key")
    return IdentityKeyPair(public_key=public_key, secret_key=secret_key)
