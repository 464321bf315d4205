"""Composes the crypto leaves into the document lifecycle.

Upload:   hash + fresh document key + encrypt/pack + wrap for the owner.
Share:    unwrap the owner's copy, wrap again for the recipient.
Revoke:   drop the recipient's entry from the access list.
Verify:   recompute the content hash and compare.
Open:     unwrap, unpack, decrypt.

Every method is a function of its arguments plus the random source; the
assembler holds no per-document state.
"""

import hashlib
import hmac
from dataclasses import replace

from docvault.crypto.commitment import CommitmentDeriver, owner_commitments, recipient_commitments
from docvault.crypto.key_exchange import KeyExchange
from docvault.crypto.models import IdentityKeyPair, WrappedKey
from docvault.crypto.random_source import RandomSource, default_random_source
from docvault.crypto.symmetric_cipher import SymmetricCipher
from docvault.records.file_types import DEFAULT_FILE_TYPE
from docvault.records.models import AccessControlList, AccessGrant, DocumentRecord, UploadBundle


class DocumentRecordAssembler:
    """Builds document records, access grants and decrypted documents."""

    DEFAULT_ID_ENTROPY_BYTES = 16

    def __init__(
        self,
        cipher: SymmetricCipher | None = None,
        key_exchange: KeyExchange | None = None,
        random_source: RandomSource | None = None,
        owner_deriver: CommitmentDeriver | None = None,
        recipient_deriver: CommitmentDeriver | None = None,
        id_entropy_bytes: int = DEFAULT_ID_ENTROPY_BYTES,
    ) -> None:
        if id_entropy_bytes < 1:
            raise ValueError("id_entropy_bytes must be positive")
        self._random = random_source if random_source is not None else default_random_source()
        self._cipher = cipher if cipher is not None else SymmetricCipher(self._random)
        self._key_exchange = (
            key_exchange if key_exchange is not None else KeyExchange(self._random)
        )
        self._owner_deriver = owner_deriver if owner_deriver is not None else owner_commitments()
        self._recipient_deriver = (
            recipient_deriver if recipient_deriver is not None else recipient_commitments()
        )
        self._id_entropy_bytes = id_entropy_bytes

    @property
    def cipher(self) -> SymmetricCipher:
        return self._cipher

    @property
    def key_exchange(self) -> KeyExchange:
        return self._key_exchange

    # ------------------------------------------------------------------
    # Commitments
    # ------------------------------------------------------------------

    def owner_commitment(self, owner_secret_key: bytes) -> bytes:
        return self._owner_deriver.commit(owner_secret_key)

    def recipient_commitment(self, recipient_public_key: bytes) -> bytes:
        return self._recipient_deriver.commit(recipient_public_key)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def upload(
        self,
        plaintext: bytes,
        owner_key_pair: IdentityKeyPair,
        file_type: str = DEFAULT_FILE_TYPE,
    ) -> UploadBundle:
        """Encrypt *plaintext* and describe it for the ledger.

        The returned record has an empty ``storage_id``; apply
        ``record.with_storage_id`` once the ciphertext has been stored.
        """
        owner_commitment = self.owner_commitment(owner_key_pair.secret_key)
        content_hash = self._cipher.hash(plaintext)
        document_key = self._cipher.generate_document_key()
        packed = self._cipher.pack(self._cipher.encrypt(plaintext, document_key))
        wrapped_key = self._key_exchange.wrap(
            document_key, owner_key_pair.public_key, owner_key_pair
        )
        del document_key

        record = DocumentRecord(
            document_id=self.new_document_id(content_hash),
            content_hash=content_hash,
            storage_id="",
            owner_commitment=owner_commitment,
            wrapped_key=wrapped_key,
            file_type=file_type,
        )
        return UploadBundle(record=record, packed_ciphertext=packed)

    def new_document_id(self, content_hash: bytes) -> bytes:
        """SHA-256 of the content hash plus fresh randomness.

        Identical content uploaded twice receives distinct ids.
        """
        salt = self._random.token_bytes(self._id_entropy_bytes)
        return hashlib.sha256(content_hash + salt).digest()

    def share(
        self,
        record: DocumentRecord,
        owner_key_pair: IdentityKeyPair,
        recipient_public_key: bytes,
    ) -> AccessGrant:
        """Wrap the document key of *record* for a new recipient.

        Raises:
            UnwrapFailedError: if owner_key_pair cannot open the record's
                wrapped key (the caller is not the owner).
            InvalidKeyLengthError: if recipient_public_key is not 32 bytes.
        """
        recipient_commitment = self.recipient_commitment(recipient_public_key)
        document_key = self._key_exchange.unwrap(record.wrapped_key, owner_key_pair.secret_key)
        wrapped_key = self._key_exchange.wrap(document_key, recipient_public_key, owner_key_pair)
        del document_key
        return AccessGrant(
            document_id=record.document_id,
            recipient_commitment=recipient_commitment,
            wrapped_key=wrapped_key,
        )

    @staticmethod
    def grant(acl: AccessControlList, grant: AccessGrant) -> AccessControlList:
        return acl.with_grant(grant)

    def revoke(self, acl: AccessControlList, recipient_public_key: bytes) -> AccessControlList:
        """Remove the recipient's entry. The recipient may still hold a
        previously unwrapped key; this is not cryptographic erasure."""
        return acl.without(self.recipient_commitment(recipient_public_key))

    def verify(self, expected: DocumentRecord | bytes, candidate_plaintext: bytes) -> bool:
        content_hash = expected.content_hash if isinstance(expected, DocumentRecord) else expected
        return hmac.compare_digest(self._cipher.hash(candidate_plaintext), content_hash)

    def open(
        self,
        wrapped_key: WrappedKey,
        packed_ciphertext: bytes,
        secret_key: bytes,
    ) -> bytes:
        """Recover plaintext for the holder of *secret_key*.

        Raises:
            UnwrapFailedError: if the caller is not a recipient of wrapped_key.
            MalformedPayloadError: if packed_ciphertext is truncated.
            AuthenticationFailedError: if the ciphertext was tampered with.
        """
        payload = self._cipher.unpack(packed_ciphertext)
        document_key = self._key_exchange.unwrap(wrapped_key, secret_key)
        try:
            return self._cipher.decrypt(payload, document_key)
        finally:
            del document_key

    @staticmethod
    def deactivate(record: DocumentRecord) -> DocumentRecord:
        return replace(record, is_active=False)
