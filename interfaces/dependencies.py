"""FastAPI dependencies backed by the Lagom container."""

from functools import lru_cache

from lagom import Container

from infrastructure.config import settings
from infrastructure.di.container import create_container


@lru_cache
def get_container() -> Container:
    """Return the process-wide container built from the environment settings.

    Stores are created on the first migration request and reused afterwards;
    a misconfigured owner or backup provider surfaces when the matching route
    resolves its use case, not at import.
    """
    return create_container(settings)
