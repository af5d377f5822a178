from .blob_descriptor import BlobDescriptor
from .mime_type import MimeType
from .owner_pubkey import parse_owner_pubkey, pubkey_from_npub

__all__ = [
    "BlobDescriptor",
    "MimeType",
    "parse_owner_pubkey",
    "pubkey_from_npub",
]
