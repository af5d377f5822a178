"""Domain exceptions for business rule violations and storage failures."""


class DomainError(Exception):
    """Base exception for domain layer."""


class ValidationError(DomainError):
    """Raised when input validation fails."""


class InfrastructureError(DomainError):
    """Raised when infrastructure operations fail (DB, network, etc.)."""


class BlobStoreError(InfrastructureError):
    """Base exception for blob store operations.

    Carries the owner and digest involved so callers can log enough context
    for manual remediation.
    """

    def __init__(self, message: str, *, owner: str | None = None, sha256: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.owner = owner
        self.sha256 = sha256


class EnumerationError(BlobStoreError):
    """Raised when the blob index of an owner cannot be read."""


class StoreWriteError(BlobStoreError):
    """Raised when a store rejects a blob descriptor."""


class StoreDeleteError(BlobStoreError):
    """Raised when a store cannot remove a blob descriptor."""
