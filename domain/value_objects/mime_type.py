from enum import Enum


class MimeType(str, Enum):
    """Media types the blob migration needs to know about."""

    OCTET_STREAM = "application/octet-stream"
