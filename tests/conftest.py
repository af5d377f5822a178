"""Shared test fixtures and configuration."""

from __future__ import annotations

import hashlib
from uuid import uuid4

import pytest

from domain.value_objects.blob_descriptor import BlobDescriptor
from tests.mocks import make_descriptor


@pytest.fixture
def owner_pubkey() -> str:
    """Return a consistent hex owner public key."""
    return hashlib.sha256(b"relay-owner").hexdigest()


@pytest.fixture
def other_owner_pubkey() -> str:
    return hashlib.sha256(b"someone-else").hexdigest()


@pytest.fixture
def sample_descriptor() -> BlobDescriptor:
    """Create a descriptor with a declared media type."""
    return make_descriptor(b"hello blossom", type="text/plain")


@pytest.fixture
def untyped_descriptor() -> BlobDescriptor:
    """Create a 1 KiB descriptor with an empty media type."""
    return make_descriptor(b"\x00" * 1024)


@pytest.fixture
def three_descriptors() -> list[BlobDescriptor]:
    return [
        make_descriptor(b"first", type="image/png"),
        make_descriptor(b"second", type="video/mp4"),
        make_descriptor(b"third"),
    ]


@pytest.fixture
def memory_url() -> str:
    """Return a fresh root on the process-wide fsspec memory filesystem."""
    return f"memory://{uuid4().hex}"
