"""Jinja2 loader backed by a temploc ResourceLoader.

Jinja2 keeps compiled templates in its own cache and asks each cached
template whether it is still up to date before reuse. This adapter answers
that question with ResourceLoader.is_stale(), so a source that changed,
disappeared or is shadowed by an earlier root gets reparsed.
"""

import logging
import os
from collections.abc import Callable
from pathlib import Path

from jinja2 import BaseLoader, Environment, TemplateNotFound

from temploc.config import RootSet
from temploc.errors import ResourceNotFoundError
from temploc.loaders.base import ResourceLoader

logger = logging.getLogger(__name__)


class MultiRootLoader(BaseLoader):
    """Jinja2 loader that delegates lookup and staleness to a ResourceLoader.

    Args:
        loader: Underlying template source loader
        encoding: Encoding used to decode template sources
    """

    def __init__(self, loader: ResourceLoader, encoding: str = "utf-8") -> None:
        self.loader = loader
        self.encoding = encoding

    def get_source(
        self,
        environment: Environment,
        template: str,
    ) -> tuple[str, str | None, Callable[[], bool]]:
        """Load template source.

        Returns:
            Tuple of (source, filename, uptodate_func)

        Raises:
            TemplateNotFound: If template cannot be found or was rejected
            UnicodeDecodeError: If the source is not valid in the configured encoding
        """
        try:
            resource = self.loader.resolve(template)
        except ResourceNotFoundError as e:
            raise TemplateNotFound(template) from e

        source = resource.read_text(self.encoding)
        known_modified = resource.last_modified
        logger.debug("Loaded template %s from %s", template, resource.path)

        def uptodate() -> bool:
            return not self.loader.is_stale(template, known_modified)

        return source, str(resource.path), uptodate

    def list_templates(self) -> list[str]:
        """List all templates under the configured directory roots.

        Raises:
            TypeError: If the loader has no directory roots to walk
        """
        root_set = getattr(self.loader, "roots", None)
        roots = root_set.directories if isinstance(root_set, RootSet) else ()
        if not roots:
            raise TypeError("this loader cannot iterate over all templates")

        templates = set()
        for root in roots:
            root_path = Path(root)
            if not root_path.is_dir():
                continue

            for dirpath, _dirnames, filenames in os.walk(root_path):
                for filename in filenames:
                    relative = (Path(dirpath) / filename).relative_to(root_path)
                    templates.add(relative.as_posix())

        return sorted(templates)
