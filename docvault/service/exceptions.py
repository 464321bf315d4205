class DocumentServiceError(Exception):
    """Base exception for document service failures."""


class DocumentInactiveError(DocumentServiceError):
    """Raised when an operation targets a deactivated document."""
