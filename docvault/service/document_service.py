from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from docvault.config.settings import Settings
from docvault.crypto.encoding import parse_public_key_hex
from docvault.crypto.exceptions import UnwrapFailedError
from docvault.crypto.models import IdentityKeyPair, WrappedKey
from docvault.logging.logger import Log
from docvault.records.assembler import DocumentRecordAssembler
from docvault.records.file_types import file_type_for
from docvault.records.models import AccessControlList, AccessGrant, DocumentRecord
from docvault.records.schemas import DocumentMetadata, WrappedKeyRecord
from docvault.repositories.metadata_repository import DocumentMetadataRepository
from docvault.service.exceptions import DocumentInactiveError
from docvault.storage.base import BaseStorage
from docvault.storage.factory import StorageFactory


@dataclass(frozen=True)
class UploadedDocument:
    """Result of a completed upload: ledger record plus local metadata."""

    record: DocumentRecord
    metadata: DocumentMetadata
    metadata_path: Path


class DocumentService:
    """Runs the document lifecycle against storage and local metadata.

    Flow: upload -> share/revoke -> download -> verify. Ledger calls are
    left to the caller, which receives records and grants to anchor.
    """

    def __init__(
        self,
        assembler: DocumentRecordAssembler,
        storage: BaseStorage,
        metadata_repo: DocumentMetadataRepository,
    ) -> None:
        self._assembler = assembler
        self._storage = storage
        self._metadata_repo = metadata_repo

    def upload(
        self,
        data: bytes,
        file_name: str,
        owner_key_pair: IdentityKeyPair,
    ) -> UploadedDocument:
        """Encrypt, store and record a document owned by *owner_key_pair*."""
        Log.info(f"Uploading {file_name} ({len(data)} bytes)")

        bundle = self._assembler.upload(data, owner_key_pair, file_type_for(file_name))
        storage_id = self._storage.upload(
            bundle.packed_ciphertext,
            {"name": file_name, "contentType": "application/octet-stream"},
        )
        record = bundle.record.with_storage_id(storage_id)
        Log.info(
            f"Stored {len(bundle.packed_ciphertext)} encrypted bytes as {storage_id}"
        )

        metadata = DocumentMetadata(
            documentId=record.document_id.hex(),
            fileName=file_name,
            contentHash=record.content_hash.hex(),
            storageCid=storage_id,
            gatewayUrl=self._storage.gateway_url(storage_id),
            wrappedKey=WrappedKeyRecord.from_domain(record.wrapped_key),
            uploadedAt=datetime.now(timezone.utc),
            fileType=record.file_type,
        )
        metadata_path = self._metadata_repo.save(metadata)
        Log.info(f"Document {metadata.short_id} uploaded, metadata at {metadata_path}")
        return UploadedDocument(record=record, metadata=metadata, metadata_path=metadata_path)

    def download(
        self,
        document_id_hex: str,
        key_pair: IdentityKeyPair,
        wrapped_key: WrappedKey | None = None,
    ) -> bytes:
        """Fetch and decrypt a document.

        Uses the owner's wrapped key from metadata unless a recipient's
        *wrapped_key* is supplied.

        Raises:
            DocumentInactiveError: if the document was deactivated.
            UnwrapFailedError: if key_pair is not a recipient.
        """
        metadata = self._find_active(document_id_hex)
        wrapped = wrapped_key if wrapped_key is not None else metadata.wrappedKey.to_domain()
        packed = self._storage.download(metadata.storageCid)
        try:
            plaintext = self._assembler.open(wrapped, packed, key_pair.secret_key)
        except UnwrapFailedError:
            Log.warning(f"Access denied for document {metadata.short_id}")
            raise
        Log.info(f"Decrypted document {metadata.short_id} ({len(plaintext)} bytes)")
        return plaintext

    def share(
        self,
        document_id_hex: str,
        owner_key_pair: IdentityKeyPair,
        recipient_public_key_hex: str,
    ) -> AccessGrant:
        """Grant the holder of *recipient_public_key_hex* access.

        Raises:
            InvalidEncodingError: if the recipient key is not 64 hex chars.
            UnwrapFailedError: if owner_key_pair does not own the document.
        """
        recipient_public_key = parse_public_key_hex(recipient_public_key_hex)
        metadata = self._find_active(document_id_hex)
        record = self._record_from_metadata(metadata, owner_key_pair)
        try:
            grant = self._assembler.share(record, owner_key_pair, recipient_public_key)
        except UnwrapFailedError:
            Log.warning(f"Share refused for document {metadata.short_id}: caller is not the owner")
            raise
        Log.info(
            f"Granted access to document {metadata.short_id} for recipient "
            f"{grant.recipient_commitment.hex()[:16]}"
        )
        return grant

    def revoke(
        self,
        acl: AccessControlList,
        recipient_public_key_hex: str,
    ) -> AccessControlList:
        recipient_public_key = parse_public_key_hex(recipient_public_key_hex)
        updated = self._assembler.revoke(acl, recipient_public_key)
        if len(updated) == len(acl):
            Log.info(f"No grant to revoke for document {acl.document_id.hex()[:16]}")
        else:
            Log.info(f"Revoked access to document {acl.document_id.hex()[:16]}")
        return updated

    def verify(self, document_id_hex: str, candidate: bytes) -> bool:
        metadata = self._metadata_repo.find(document_id_hex)
        verified = self._assembler.verify(metadata.content_hash_bytes(), candidate)
        Log.info(
            f"Verification of document {metadata.short_id}: "
            f"{'VERIFIED' if verified else 'FAILED'}"
        )
        return verified

    def deactivate(self, document_id_hex: str) -> DocumentMetadata:
        metadata = self._metadata_repo.find(document_id_hex)
        updated = metadata.model_copy(update={"isActive": False})
        self._metadata_repo.save(updated)
        Log.info(f"Document {metadata.short_id} deactivated")
        return updated

    def list_documents(self) -> list[DocumentMetadata]:
        return self._metadata_repo.list_all()

    def _find_active(self, document_id_hex: str) -> DocumentMetadata:
        metadata = self._metadata_repo.find(document_id_hex)
        if not metadata.isActive:
            raise DocumentInactiveError(f"Document {metadata.short_id} is inactive")
        return metadata

    def _record_from_metadata(
        self,
        metadata: DocumentMetadata,
        owner_key_pair: IdentityKeyPair,
    ) -> DocumentRecord:
        return DocumentRecord(
            document_id=metadata.document_id_bytes(),
            content_hash=metadata.content_hash_bytes(),
            storage_id=metadata.storageCid,
            owner_commitment=self._assembler.owner_commitment(owner_key_pair.secret_key),
            wrapped_key=metadata.wrappedKey.to_domain(),
            file_type=metadata.fileType,
            is_active=metadata.isActive,
        )


def build_document_service(
    settings: Settings,
    files_root: Path | None = None,
    metadata_dir: Path | None = None,
) -> DocumentService:
    """Build a DocumentService with all required adapters."""
    Log.configure(settings.log_level)
    assembler = DocumentRecordAssembler(id_entropy_bytes=settings.document_id_entropy_bytes)
    storage = StorageFactory.create(settings, files_root=files_root)
    metadata_repo = DocumentMetadataRepository(
        metadata_dir if metadata_dir is not None else Path(settings.metadata_dir)
    )
    return DocumentService(
        assembler=assembler,
        storage=storage,
        metadata_repo=metadata_repo,
    )
