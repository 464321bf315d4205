class StorageError(Exception):
    """Base exception for storage collaborator failures."""


class StorageObjectNotFoundError(StorageError):
    """Raised when a storage id does not resolve to stored bytes."""
