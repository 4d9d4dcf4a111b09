"""temploc loaders - template source lookup implementations.

Loaders:
- FileResourceLoader: Ordered multi-root file system lookup with provenance
"""

from temploc.errors import (
    InvalidRequestError,
    LoaderNotAvailableError,
    ResourceNotFoundError,
    TraversalRejectedError,
)
from temploc.loaders.base import ResourceLoader
from temploc.loaders.file import FileResourceLoader
from temploc.loaders.registry import LoaderRegistry, get_registry, reset_registry

__all__ = [
    "FileResourceLoader",
    "InvalidRequestError",
    "LoaderNotAvailableError",
    "LoaderRegistry",
    "ResourceLoader",
    "ResourceNotFoundError",
    "TraversalRejectedError",
    "get_registry",
    "reset_registry",
    "setup_default_loaders",
]


def setup_default_loaders(registry: LoaderRegistry | None = None) -> LoaderRegistry:
    """Register all default loader kinds.

    Args:
        registry: Registry to populate (uses global if None)

    Returns:
        Populated LoaderRegistry
    """
    if registry is None:
        registry = get_registry()

    registry.register("file", FileResourceLoader, is_default=True)

    return registry
