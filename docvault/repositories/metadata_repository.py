from pathlib import Path

from pydantic import ValidationError

from docvault.records.schemas import DocumentMetadata
from docvault.repositories.exceptions import CorruptRecordError, DocumentMetadataNotFoundError

METADATA_SUFFIX = ".doc.json"


def metadata_file_path(directory: Path, document_id_hex: str) -> Path:
    """Build path to metadata file: {directory}/{first 16 hex chars}.doc.json"""
    return directory / f"{document_id_hex[:16].lower()}{METADATA_SUFFIX}"


class DocumentMetadataRepository:
    """One JSON metadata file per uploaded document."""

    def __init__(self, directory: Path | str) -> None:
        self._directory = Path(directory)

    def save(self, metadata: DocumentMetadata) -> Path:
        self._directory.mkdir(parents=True, exist_ok=True)
        path = metadata_file_path(self._directory, metadata.documentId)
        with path.open("w", encoding="utf-8") as fh:
            fh.write(metadata.model_dump_json(indent=2))
        return path

    def find(self, document_id_hex: str) -> DocumentMetadata:
        """Find metadata by full or 16-character document id.

        Raises:
            DocumentMetadataNotFoundError: if no file exists, or the stored
                id does not start with the requested id.
            CorruptRecordError: if the file cannot be parsed.
        """
        path = metadata_file_path(self._directory, document_id_hex)
        if not path.exists():
            raise DocumentMetadataNotFoundError(f"Metadata not found for {document_id_hex}")
        metadata = self._read(path)
        if not metadata.documentId.startswith(document_id_hex.lower()):
            raise DocumentMetadataNotFoundError(f"Metadata not found for {document_id_hex}")
        return metadata

    def list_all(self) -> list[DocumentMetadata]:
        if not self._directory.exists():
            return []
        paths = sorted(self._directory.glob(f"*{METADATA_SUFFIX}"))
        return [self._read(path) for path in paths]

    @staticmethod
    def _read(path: Path) -> DocumentMetadata:
        with path.open("r", encoding="utf-8") as fh:
            content = fh.read()
        try:
            return DocumentMetadata.model_validate_json(content)
        except ValidationError as exc:
            raise CorruptRecordError(f"Invalid metadata file: {path}") from exc
