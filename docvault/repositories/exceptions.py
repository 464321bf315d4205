class RepositoryError(Exception):
    """Base exception for local persistence errors."""


class KeyPairNotFoundError(RepositoryError):
    """Raised when no key-pair file exists at the configured path."""


class DocumentMetadataNotFoundError(RepositoryError):
    """Raised when no metadata file exists for a document id."""


class CorruptRecordError(RepositoryError):
    """Raised when a persisted JSON record cannot be parsed."""
