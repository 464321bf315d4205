from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from docvault.crypto.models import WrappedKey


@dataclass(frozen=True)
class DocumentRecord:
    """Ledger-facing description of one uploaded document."""

    document_id: bytes
    content_hash: bytes
    storage_id: str
    owner_commitment: bytes
    wrapped_key: WrappedKey
    file_type: str = "application/octet-stream"
    is_active: bool = True

    @property
    def document_id_hex(self) -> str:
        return self.document_id.hex()

    def with_storage_id(self, storage_id: str) -> "DocumentRecord":
        return replace(self, storage_id=storage_id)


@dataclass(frozen=True)
class UploadBundle:
    """Everything produced by an upload: the record and the bytes to store."""

    record: DocumentRecord
    packed_ciphertext: bytes


@dataclass(frozen=True)
class AccessGrant:
    """A wrapped document key addressed to one recipient commitment."""

    document_id: bytes
    recipient_commitment: bytes
    wrapped_key: WrappedKey


@dataclass(frozen=True)
class AccessControlList:
    """Immutable set of grants for a single document, keyed by commitment."""

    document_id: bytes
    grants: Mapping[bytes, WrappedKey] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "grants", MappingProxyType(dict(self.grants)))

    def __contains__(self, recipient_commitment: object) -> bool:
        return recipient_commitment in self.grants

    def __len__(self) -> int:
        return len(self.grants)

    def lookup(self, recipient_commitment: bytes) -> WrappedKey | None:
        return self.grants.get(recipient_commitment)

    def with_grant(self, grant: AccessGrant) -> "AccessControlList":
        if grant.document_id != self.document_id:
            raise ValueError("Grant belongs to a different document")
        grants = dict(self.grants)
        grants[grant.recipient_commitment] = grant.wrapped_key
        return AccessControlList(document_id=self.document_id, grants=grants)

    def without(self, recipient_commitment: bytes) -> "AccessControlList":
        grants = {k: v for k, v in self.grants.items() if k != recipient_commitment}
        return AccessControlList(document_id=self.document_id, grants=grants)
