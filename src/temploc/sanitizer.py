"""Template name sanitization.

Names are normalized as pure strings before any file system access. The
result always starts with "/" (the logical template namespace root) and
never contains a segment that climbs above it. No root set is consulted,
so a name rejected here is rejected for every configuration.
"""

import logging

from temploc.errors import InvalidRequestError, TraversalRejectedError

logger = logging.getLogger(__name__)


def normalize_path(path: str) -> str | None:
    """Normalize a slash-separated path relative to the namespace root.

    Backslashes become slashes, "//" runs collapse, "." segments are
    dropped and each ".." removes the segment before it.

    Args:
        path: Raw template name

    Returns:
        Normalized path starting with "/", or None if a ".." would climb
        above the namespace root
    """
    normalized = path.replace("\\", "/")

    if normalized == "/.":
        return "/"

    if not normalized.startswith("/"):
        normalized = "/" + normalized

    # Trailing "." and ".." behave like directory segments
    if normalized.endswith("/.") or normalized.endswith("/.."):
        normalized += "/"

    while "//" in normalized:
        normalized = normalized.replace("//", "/")

    while "/./" in normalized:
        normalized = normalized.replace("/./", "/")

    while True:
        index = normalized.find("/../")
        if index < 0:
            break
        if index == 0:
            return None
        parent = normalized.rfind("/", 0, index)
        normalized = normalized[:parent] + normalized[index + 3 :]

    return normalized


def sanitize(template_name: str | None) -> str:
    """Sanitize a template name for lookup under any root.

    Args:
        template_name: Logical template name supplied by the caller

    Returns:
        Normalized name starting with "/"

    Raises:
        InvalidRequestError: If the name is None or empty
        TraversalRejectedError: If the name would escape the namespace root
    """
    if not template_name:
        raise InvalidRequestError(template_name)

    normalized = normalize_path(template_name)
    if not normalized:
        error = TraversalRejectedError(template_name)
        logger.error("Template lookup rejected: %s", error.message)
        raise error

    return normalized
