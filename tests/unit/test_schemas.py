import json
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from docvault.crypto.exceptions import InvalidEncodingError
from docvault.crypto.key_exchange import KeyExchange
from docvault.crypto.models import IdentityKeyPair, WrappedKey
from docvault.records.models import AccessGrant
from docvault.records.schemas import (
    AccessGrantRecord,
    DocumentMetadata,
    KeyPairFile,
    WrappedKeyRecord,
)


def _wrapped_key(key_exchange: KeyExchange, sender: IdentityKeyPair, recipient: IdentityKeyPair) -> WrappedKey:
    return key_exchange.wrap(bytes(range(32)), recipient.public_key, sender)


def _metadata(wrapped: WrappedKeyRecord) -> DocumentMetadata:
    return DocumentMetadata(
        documentId="ab" * 32,
        fileName="report.pdf",
        contentHash="cd" * 32,
        storageCid="ef" * 32,
        gatewayUrl="http://localhost:8080/ipfs/" + "ef" * 32,
        wrappedKey=wrapped,
        uploadedAt=datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
    )


class TestWrappedKeyRecord:
    def test_hex_field_lengths(
        self, key_exchange: KeyExchange, alice: IdentityKeyPair, bob: IdentityKeyPair
    ) -> None:
        record = WrappedKeyRecord.from_domain(_wrapped_key(key_exchange, alice, bob))
        assert len(bytes.fromhex(record.encryptedKey)) == 48
        assert len(bytes.fromhex(record.nonce)) == 24
        assert record.senderPublicKey == alice.public_key.hex()

    def test_json_uses_camel_case_keys(
        self, key_exchange: KeyExchange, alice: IdentityKeyPair, bob: IdentityKeyPair
    ) -> None:
        record = WrappedKeyRecord.from_domain(_wrapped_key(key_exchange, alice, bob))
        assert set(json.loads(record.model_dump_json())) == {
            "encryptedKey",
            "nonce",
            "senderPublicKey",
        }

    def test_restored_key_still_unwraps(
        self, key_exchange: KeyExchange, alice: IdentityKeyPair, bob: IdentityKeyPair
    ) -> None:
        wrapped = _wrapped_key(key_exchange, alice, bob)
        restored = WrappedKeyRecord.model_validate_json(
            WrappedKeyRecord.from_domain(wrapped).model_dump_json()
        ).to_domain()
        assert restored == wrapped
        assert key_exchange.unwrap(restored, bob.secret_key) == bytes(range(32))

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("encryptedKey", "00" * 32),
            ("nonce", "00" * 12),
            ("senderPublicKey", "zz" * 32),
        ],
    )
    def test_to_domain_rejects_bad_fields(self, field: str, value: str) -> None:
        data = {"encryptedKey": "00" * 48, "nonce": "00" * 24, "senderPublicKey": "00" * 32}
        data[field] = value
        with pytest.raises(InvalidEncodingError):
            WrappedKeyRecord(**data).to_domain()

    def test_missing_field_fails_validation(self) -> None:
        with pytest.raises(ValidationError):
            WrappedKeyRecord.model_validate({"encryptedKey": "00", "nonce": "00"})


class TestKeyPairFile:
    def test_round_trip(self, alice: IdentityKeyPair) -> None:
        restored = KeyPairFile.model_validate_json(
            KeyPairFile.from_domain(alice).model_dump_json()
        ).to_domain()
        assert restored == alice

    def test_json_layout(self, alice: IdentityKeyPair) -> None:
        data = json.loads(KeyPairFile.from_domain(alice).model_dump_json())
        assert data == {"publicKey": alice.public_key.hex(), "secretKey": alice.secret_key.hex()}


class TestDocumentMetadata:
    def test_json_layout(
        self, key_exchange: KeyExchange, alice: IdentityKeyPair
    ) -> None:
        wrapped = WrappedKeyRecord.from_domain(_wrapped_key(key_exchange, alice, alice))
        data = json.loads(_metadata(wrapped).model_dump_json())
        assert {
            "documentId",
            "fileName",
            "contentHash",
            "storageCid",
            "gatewayUrl",
            "wrappedKey",
            "uploadedAt",
        } <= set(data)
        assert data["wrappedKey"]["senderPublicKey"] == alice.public_key.hex()

    def test_uploaded_at_is_iso_8601(
        self, key_exchange: KeyExchange, alice: IdentityKeyPair
    ) -> None:
        wrapped = WrappedKeyRecord.from_domain(_wrapped_key(key_exchange, alice, alice))
        data = json.loads(_metadata(wrapped).model_dump_json())
        parsed = datetime.fromisoformat(data["uploadedAt"].replace("Z", "+00:00"))
        assert parsed == datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    def test_defaults_and_helpers(
        self, key_exchange: KeyExchange, alice: IdentityKeyPair
    ) -> None:
        wrapped = WrappedKeyRecord.from_domain(_wrapped_key(key_exchange, alice, alice))
        metadata = _metadata(wrapped)
        assert metadata.isActive is True
        assert metadata.fileType == "application/octet-stream"
        assert metadata.short_id == "ab" * 8
        assert metadata.document_id_bytes() == b"\xab" * 32
        assert metadata.content_hash_bytes() == b"\xcd" * 32


class TestAccessGrantRecord:
    def test_round_trip(
        self, key_exchange: KeyExchange, alice: IdentityKeyPair, bob: IdentityKeyPair
    ) -> None:
        grant = AccessGrant(
            document_id=b"\x01" * 32,
            recipient_commitment=b"\x02" * 32,
            wrapped_key=_wrapped_key(key_exchange, alice, bob),
        )
        record = AccessGrantRecord.from_domain(grant)
        assert record.recipientCommitment == "02" * 32
        assert AccessGrantRecord.model_validate_json(record.model_dump_json()).to_domain() == grant
