"""File system template loader.

Treats template names as relative to each configured root, searched in
order. If a root is empty the template name is treated as an absolute path.

The loader remembers which root supplied each name (its provenance) so it
can later check the modification time of exactly that file. A source may
exist under several roots, and a file created in an earlier root shadows
the one that was loaded, so staleness checks always re-run the search.
"""

import os
from pathlib import Path
from typing import Any

from temploc.config import ABSOLUTE_ROOT, LoaderConfig, RootSet
from temploc.errors import ResourceNotFoundError
from temploc.loaders.base import ResourceLoader
from temploc.models.resource import ResolvedResource
from temploc.provenance import ProvenanceTable
from temploc.sanitizer import sanitize
from temploc.utils.logging import get_logger

logger = get_logger(__name__)

# Returned by last_modified() when the source cannot be read
UNKNOWN_MODIFIED = 0.0


def candidate_for(root: str, template: str) -> Path:
    """Build the file reference for a sanitized template under a root.

    Args:
        root: Search root, or "" for absolute path mode
        template: Sanitized template name

    Returns:
        Candidate file path (not checked for existence)
    """
    if root == ABSOLUTE_ROOT:
        return Path(template)

    # A leading slash must not turn the name into an absolute path
    return Path(root) / template.lstrip("/")


def _is_readable(path: Path) -> bool:
    try:
        return path.is_file() and os.access(path, os.R_OK)
    except OSError:
        return False


def _modified_time(path: Path) -> float | None:
    try:
        return path.stat().st_mtime
    except OSError:
        return None


class FileResourceLoader(ResourceLoader):
    """Loads template sources from an ordered set of directories.

    Usage:
        loader = FileResourceLoader(RootSet.from_option(["site", "defaults"]))
        with loader.resolve("page.j2") as resource:
            source = resource.read_text()
        ...
        if loader.is_stale("page.j2", resource.last_modified):
            ...  # reparse

    Attributes:
        roots: Search roots in priority order
    """

    def __init__(
        self,
        roots: RootSet | None = None,
        provenance: ProvenanceTable | None = None,
        name: str = "file",
    ) -> None:
        """Initialize the loader.

        Args:
            roots: Search roots (absolute path mode if None)
            provenance: Provenance table to record lookups in (private if None)
            name: Loader kind identifier
        """
        super().__init__(name)
        logger.trace("FileResourceLoader: initialization starting")

        self.roots = roots if roots is not None else RootSet()
        self._provenance = provenance if provenance is not None else ProvenanceTable()

        for root in self.roots:
            logger.info("FileResourceLoader: adding path '%s'", root)

        logger.trace("FileResourceLoader: initialization complete")

    @classmethod
    def from_config(cls, config: LoaderConfig) -> "FileResourceLoader":
        """Create a loader from configuration."""
        return cls(config.path, name=config.loader)

    @property
    def provenance(self) -> ProvenanceTable:
        return self._provenance

    # =========================================================================
    # Lookup
    # =========================================================================

    def resolve(self, template_name: str) -> ResolvedResource:
        """Locate a template and open a byte stream over it.

        Roots are probed in order; the first readable file wins and its root
        is recorded as the provenance of the name. Per-root I/O errors are
        treated as "not here" and the search continues.

        Args:
            template_name: Logical template name

        Returns:
            ResolvedResource whose stream the caller must close

        Raises:
            InvalidRequestError: If the name is empty or missing
            TraversalRejectedError: If the name tries to leave the namespace
            ResourceNotFoundError: If no root holds a readable file
        """
        template = sanitize(template_name)

        for root in self.roots:
            resource = self._open(root, template, template_name)
            if resource is not None:
                self._provenance.put(template_name, root)
                logger.debug("Found template %s under root '%s'", template_name, root)
                return resource

        raise ResourceNotFoundError(
            template,
            f"FileResourceLoader: cannot find {template}",
        )

    def _open(self, root: str, template: str, template_name: str) -> ResolvedResource | None:
        path = candidate_for(root, template)
        if not _is_readable(path):
            return None

        try:
            # Closed by the caller
            stream = open(path, "rb")
        except OSError as e:
            logger.debug("Skipping unreadable candidate %s: %s", path, e)
            return None

        try:
            modified = os.fstat(stream.fileno()).st_mtime
        except OSError as e:
            stream.close()
            logger.debug("Skipping candidate %s: %s", path, e)
            return None

        return ResolvedResource(
            name=template_name,
            root=root,
            path=path,
            last_modified=modified,
            stream=stream,
        )

    def current_root(self, template_name: str) -> str | None:
        """Return the root a lookup would use now, without recording it.

        Args:
            template_name: Logical template name

        Returns:
            First root holding a readable file, or None
        """
        return self._find_root(sanitize(template_name))

    def _find_root(self, template: str) -> str | None:
        for root in self.roots:
            if _is_readable(candidate_for(root, template)):
                return root
        return None

    # =========================================================================
    # Staleness
    # =========================================================================

    def is_stale(self, template_name: str, known_modified: float) -> bool:
        """Decide whether a previously loaded template must be reloaded.

        The file that would be loaded today is compared with the file the
        template was loaded from. The source is fresh only when both are the
        same readable file and its modification time is unchanged.

        Args:
            template_name: Logical template name
            known_modified: Modification time recorded when it was loaded

        Returns:
            True unless the loaded source is provably unchanged
        """
        try:
            template = sanitize(template_name)
        except ResourceNotFoundError:
            return True

        current = self._find_root(template)
        if current is None:
            return True

        loaded = self._provenance.get(template_name)
        if loaded is None:
            loaded = current

        current_file = candidate_for(current, template)
        loaded_file = candidate_for(loaded, template)

        if not loaded_file.exists():
            return True

        if current_file != loaded_file or not _is_readable(loaded_file):
            return True

        modified = _modified_time(loaded_file)
        return modified is None or modified != known_modified

    def last_modified(self, template_name: str) -> float:
        """Return the modification time of the file the template was loaded from.

        Args:
            template_name: Logical template name

        Returns:
            Modification time, or 0 if the name was never loaded or the
            file cannot be read
        """
        root = self._provenance.get(template_name)
        if root is None:
            return UNKNOWN_MODIFIED

        try:
            template = sanitize(template_name)
        except ResourceNotFoundError:
            return UNKNOWN_MODIFIED

        path = candidate_for(root, template)
        if not _is_readable(path):
            return UNKNOWN_MODIFIED

        modified = _modified_time(path)
        return UNKNOWN_MODIFIED if modified is None else modified

    def get_metadata(self) -> dict[str, Any]:
        """Get loader metadata for logging and debugging."""
        return {
            "name": self.name,
            "roots": list(self.roots),
            "tracked_templates": len(self._provenance),
        }
