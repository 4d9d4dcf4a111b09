"""Loader registry for pluggable template source loaders.

The registry maps a loader kind (the "loader" config option) to the class
that implements it. Loader classes are configured in YAML, not hardcoded.
"""

from typing import Any

from temploc.config import LoaderConfig
from temploc.errors import LoaderNotAvailableError
from temploc.loaders.base import ResourceLoader


class LoaderRegistry:
    """Registry of available loader kinds.

    Configuration example:
        loader: file    # → uses FileResourceLoader

    Adding a new loader kind:
        1. Implement ResourceLoader (resolve, is_stale, last_modified)
        2. Provide a from_config() classmethod
        3. Register it here
    """

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._loaders: dict[str, type[ResourceLoader]] = {}
        self._default: str | None = None

    def register(
        self,
        name: str,
        loader_class: type[ResourceLoader],
        is_default: bool = False,
    ) -> None:
        """Register a loader kind.

        Args:
            name: Loader identifier (e.g., "file")
            loader_class: Loader class to register
            is_default: Whether this is the default loader kind
        """
        self._loaders[name] = loader_class
        if is_default:
            self._default = name

    def create(self, config: LoaderConfig | None = None) -> ResourceLoader:
        """Build the loader selected by configuration.

        Args:
            config: Loader configuration (default loader kind if None)

        Returns:
            Instantiated loader

        Raises:
            LoaderNotAvailableError: If the loader kind is not registered
        """
        if config is None:
            if self._default is None:
                raise LoaderNotAvailableError("loader", "No loader configured")
            config = LoaderConfig(loader=self._default)
        loader_name = config.loader

        if loader_name not in self._loaders:
            available = self.list_loaders()
            raise LoaderNotAvailableError(
                loader_name,
                f"Loader '{loader_name}' not registered. Available: {available}",
            )

        return self._loaders[loader_name].from_config(config)

    def list_loaders(self) -> list[str]:
        """Get list of registered loader names."""
        return list(self._loaders.keys())

    @property
    def default(self) -> str | None:
        return self._default

    def get_metadata(self) -> dict[str, Any]:
        """Get registry metadata for logging and debugging."""
        return {
            "loaders": self.list_loaders(),
            "default": self._default,
        }


# Global registry instance
_registry: LoaderRegistry | None = None


def get_registry() -> LoaderRegistry:
    """Get the global loader registry instance."""
    global _registry
    if _registry is None:
        _registry = LoaderRegistry()
    return _registry


def reset_registry() -> None:
    """Reset the global registry (primarily for testing)."""
    global _registry
    _registry = None
