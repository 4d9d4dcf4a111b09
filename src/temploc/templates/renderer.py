"""Template rendering over multi-root template sources.

Builds a Jinja2 environment whose loader is a temploc ResourceLoader, with
auto-reload enabled so every cached template is checked for staleness
before it is reused.
"""

import logging
from pathlib import Path
from typing import Any

from jinja2 import Environment, TemplateNotFound, select_autoescape

from temploc.config import LoaderConfig
from temploc.errors import ResourceNotFoundError
from temploc.loaders import get_registry, setup_default_loaders
from temploc.loaders.base import ResourceLoader
from temploc.templates.loader import MultiRootLoader

logger = logging.getLogger(__name__)


def create_environment(
    config: LoaderConfig | None = None,
    loader: ResourceLoader | None = None,
    **options: Any,
) -> Environment:
    """Create a Jinja2 environment over configured template roots.

    Args:
        config: Loader configuration (defaults if None)
        loader: Existing loader to reuse (built from config if None)
        **options: Extra Environment options, overriding the defaults

    Returns:
        Environment with auto-reload enabled
    """
    config = config or LoaderConfig()
    if loader is None:
        registry = get_registry()
        if not registry.list_loaders():
            setup_default_loaders(registry)
        loader = registry.create(config)

    settings: dict[str, Any] = {
        "autoescape": select_autoescape(["html", "xml"]),
        "trim_blocks": True,
        "lstrip_blocks": True,
        "keep_trailing_newline": True,
        "auto_reload": True,
    }
    settings.update(options)

    return Environment(loader=MultiRootLoader(loader, config.encoding), **settings)


class TemplateRenderer:
    """Renders templates found under the configured roots.

    Usage:
        renderer = TemplateRenderer(config)
        text = renderer.render("page.j2", {"title": "Hello"})
    """

    def __init__(
        self,
        config: LoaderConfig | None = None,
        loader: ResourceLoader | None = None,
    ) -> None:
        """Initialize the renderer.

        Args:
            config: Loader configuration
            loader: Existing loader to reuse (built from config if None)
        """
        self.config = config or LoaderConfig()
        self._env = create_environment(self.config, loader)

    @property
    def environment(self) -> Environment:
        return self._env

    def render(self, template_name: str, context: dict[str, Any] | None = None) -> str:
        """Render a template.

        Args:
            template_name: Logical template name
            context: Template variables

        Returns:
            Rendered text

        Raises:
            ResourceNotFoundError: If the template cannot be loaded
            ValueError: If the template cannot be decoded or rendering fails
        """
        try:
            template = self._env.get_template(template_name)
        except TemplateNotFound as e:
            logger.error("Failed to load template %s: %s", template_name, e)
            raise ResourceNotFoundError(template_name) from e
        except UnicodeDecodeError as e:
            logger.error("Failed to decode template %s: %s", template_name, e)
            raise ValueError(f"Template {template_name} could not be decoded: {e}") from e

        try:
            rendered = template.render(**(context or {}))
        except Exception as e:
            logger.error("Template rendering failed: %s", e)
            raise ValueError(f"Template rendering failed: {e}") from e

        logger.info("Rendered %s (%d characters)", template_name, len(rendered))
        return rendered

    def render_to_file(
        self,
        template_name: str,
        output_path: Path,
        context: dict[str, Any] | None = None,
    ) -> Path:
        """Render a template and write the result to a file.

        Args:
            template_name: Logical template name
            output_path: Path to write output file
            context: Template variables

        Returns:
            Path to written file
        """
        content = self.render(template_name, context)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
        logger.info("Wrote %s to %s", template_name, output_path)

        return output_path
