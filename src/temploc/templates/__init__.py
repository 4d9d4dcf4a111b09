"""temploc template rendering.

Jinja2 integration: a BaseLoader that reads sources through a temploc
ResourceLoader and reparses them when they go stale.
"""

from temploc.templates.loader import MultiRootLoader
from temploc.templates.renderer import TemplateRenderer, create_environment

__all__ = ["MultiRootLoader", "TemplateRenderer", "create_environment"]
