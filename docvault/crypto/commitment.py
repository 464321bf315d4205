"""One-way commitments to identity keys for public ledgers.

A commitment is ``SHA-256(context || key)``. Content hashes are plain
SHA-256 of the document, and owner and recipient commitments use
different contexts, so the three kinds of 32-byte value never collide
by construction even for identical inputs.
"""

import hashlib

from docvault.crypto.models import require_key_size

OWNER_COMMITMENT_CONTEXT = b"docvault:owner-commitment:v1:"
RECIPIENT_COMMITMENT_CONTEXT = b"docvault:recipient-commitment:v1:"


def commit(key: bytes, context: bytes = OWNER_COMMITMENT_CONTEXT) -> bytes:
    """Return the 32-byte commitment to *key* under *context*.

    Raises:
        InvalidKeyLengthError: if key is not 32 bytes.
    """
    require_key_size(key, "committed key")
    return hashlib.sha256(context + bytes(key)).digest()


class CommitmentDeriver:
    """Commitment function bound to one domain-separation context."""

    def __init__(self, context: bytes) -> None:
        if not context:
            raise ValueError("Commitment context must not be empty")
        self._context = context

    @property
    def context(self) -> bytes:
        return self._context

    def commit(self, key: bytes) -> bytes:
        return commit(key, self._context)

    def commit_hex(self, key: bytes) -> str:
        return self.commit(key).hex()


def owner_commitments() -> CommitmentDeriver:
    return CommitmentDeriver(OWNER_COMMITMENT_CONTEXT)


def recipient_commitments() -> CommitmentDeriver:
    return CommitmentDeriver(RECIPIENT_COMMITMENT_CONTEXT)
