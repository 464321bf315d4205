"""JSON wire records for persistence and transport.

Field names follow the camelCase layout used on disk and by the ledger
client, so the models can be dumped and loaded without aliases.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field

from docvault.crypto.encoding import key_from_hex, key_pair_from_hex
from docvault.crypto.exceptions import InvalidEncodingError
from docvault.crypto.models import (
    BOX_NONCE_SIZE,
    KEY_SIZE,
    WRAPPED_KEY_SIZE,
    IdentityKeyPair,
    WrappedKey,
)
from docvault.records.models import AccessGrant


def _decode_hex(text: str, size: int, name: str) -> bytes:
    try:
        raw = bytes.fromhex(text)
    except ValueError as exc:
        raise InvalidEncodingError(f"Invalid {name}: not a hex string") from exc
    if len(raw) != size:
        raise InvalidEncodingError(f"Invalid {name}: expected {size} bytes, got {len(raw)}")
    return raw


class WrappedKeyRecord(BaseModel):
    encryptedKey: str
    nonce: str
    senderPublicKey: str

    @classmethod
    def from_domain(cls, wrapped_key: WrappedKey) -> "WrappedKeyRecord":
        return cls(
            encryptedKey=wrapped_key.encrypted_key.hex(),
            nonce=wrapped_key.nonce.hex(),
            senderPublicKey=wrapped_key.sender_public_key.hex(),
        )

    def to_domain(self) -> WrappedKey:
        """Decode hex fields into a WrappedKey.

        Raises:
            InvalidEncodingError: if any field is not hex of the right size.
        """
        return WrappedKey(
            encrypted_key=_decode_hex(self.encryptedKey, WRAPPED_KEY_SIZE, "encrypted key"),
            nonce=_decode_hex(self.nonce, BOX_NONCE_SIZE, "nonce"),
            sender_public_key=_decode_hex(self.senderPublicKey, KEY_SIZE, "sender public key"),
        )


class KeyPairFile(BaseModel):
    publicKey: str
    secretKey: str

    @classmethod
    def from_domain(cls, key_pair: IdentityKeyPair) -> "KeyPairFile":
        return cls(publicKey=key_pair.public_key.hex(), secretKey=key_pair.secret_key.hex())

    def to_domain(self) -> IdentityKeyPair:
        return key_pair_from_hex(self.publicKey, self.secretKey)


class DocumentMetadata(BaseModel):
    documentId: str
    fileName: str
    contentHash: str
    storageCid: str
    gatewayUrl: str
    wrappedKey: WrappedKeyRecord
    uploadedAt: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    fileType: str = "application/octet-stream"
    isActive: bool = True

    @property
    def short_id(self) -> str:
        return self.documentId[:16]

    def document_id_bytes(self) -> bytes:
        return key_from_hex(self.documentId, "document id")

    def content_hash_bytes(self) -> bytes:
        return key_from_hex(self.contentHash, "content hash")


class AccessGrantRecord(BaseModel):
    documentId: str
    recipientCommitment: str
    wrappedKey: WrappedKeyRecord

    @classmethod
    def from_domain(cls, grant: AccessGrant) -> "AccessGrantRecord":
        return cls(
            documentId=grant.document_id.hex(),
            recipientCommitment=grant.recipient_commitment.hex(),
            wrappedKey=WrappedKeyRecord.from_domain(grant.wrapped_key),
        )

    def to_domain(self) -> AccessGrant:
        return AccessGrant(
            document_id=key_from_hex(self.documentId, "document id"),
            recipient_commitment=key_from_hex(self.recipientCommitment, "recipient commitment"),
            wrapped_key=self.wrappedKey.to_domain(),
        )
