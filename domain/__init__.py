"""Domain layer exports."""

from domain.exceptions import (
    BlobStoreError,
    DomainError,
    EnumerationError,
    InfrastructureError,
    StoreDeleteError,
    StoreWriteError,
    ValidationError,
)
from domain.value_objects import BlobDescriptor, MimeType

__all__ = [
    "BlobDescriptor",
    "BlobStoreError",
    "DomainError",
    "EnumerationError",
    "InfrastructureError",
    "MimeType",
    "StoreDeleteError",
    "StoreWriteError",
    "ValidationError",
]
