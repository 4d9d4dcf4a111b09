"""Errors raised by template source loaders.

Callers only need to handle ResourceNotFoundError: invalid and rejected
names are subclasses so they look like ordinary misses from outside while
staying distinguishable for logging and auditing.
"""


class ResourceNotFoundError(Exception):
    """Raised when a template cannot be supplied by a loader."""

    def __init__(self, template_name: str | None, message: str | None = None) -> None:
        self.template_name = template_name
        self.message = message or f"Cannot find template: {template_name}"
        super().__init__(self.message)


class InvalidRequestError(ResourceNotFoundError):
    """Raised when no template name was supplied at all."""

    def __init__(self, template_name: str | None = None) -> None:
        super().__init__(template_name, "Need to specify a file name or file path")


class TraversalRejectedError(ResourceNotFoundError):
    """Raised when a template name would resolve outside the template root."""

    def __init__(self, template_name: str) -> None:
        super().__init__(
            template_name,
            f"Template name '{template_name}' contains '..' and may be trying to "
            "access content outside of template root. Rejected.",
        )


class LoaderNotAvailableError(Exception):
    """Raised when a requested loader kind is not registered."""

    def __init__(self, loader_name: str, message: str | None = None) -> None:
        self.loader_name = loader_name
        self.message = message or f"Loader not available: {loader_name}"
        super().__init__(self.message)
