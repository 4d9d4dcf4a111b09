"""Abstract base class for resource loaders.

Every loader kind (file system today; package data or URLs in the future)
MUST implement the same three-operation contract so the host engine can
treat all loader kinds uniformly:
1. resolve: locate a template by name and open its byte stream
2. is_stale: decide whether a previously loaded source must be reloaded
3. last_modified: report the modification time of the loaded source
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from temploc.config import LoaderConfig
    from temploc.models.resource import ResolvedResource


class ResourceLoader(ABC):
    """Abstract interface for pluggable template source loaders.

    Attributes:
        name: Loader kind identifier (e.g., "file")
    """

    def __init__(self, name: str) -> None:
        self.name = name

    @classmethod
    @abstractmethod
    def from_config(cls, config: "LoaderConfig") -> "ResourceLoader":
        """Create a loader from configuration."""
        pass

    @abstractmethod
    def resolve(self, template_name: str) -> "ResolvedResource":
        """Locate a template and open a byte stream over it.

        Ownership of the returned stream passes to the caller.

        Args:
            template_name: Logical template name

        Returns:
            Freshly resolved resource

        Raises:
            InvalidRequestError: If the name is empty or missing
            TraversalRejectedError: If the name tries to leave the namespace
            ResourceNotFoundError: If no source exists for the name
        """
        pass

    @abstractmethod
    def is_stale(self, template_name: str, known_modified: float) -> bool:
        """Decide whether a previously loaded template must be reloaded.

        Args:
            template_name: Logical template name
            known_modified: Modification time recorded when it was loaded

        Returns:
            True if the cached form must not be reused
        """
        pass

    @abstractmethod
    def last_modified(self, template_name: str) -> float:
        """Return the modification time of the loaded source, or 0 if unknown."""
        pass

    def get_metadata(self) -> dict[str, Any]:
        """Get loader metadata for logging and debugging."""
        return {"name": self.name}
