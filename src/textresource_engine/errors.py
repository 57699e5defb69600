"""Error kinds raised while generating providers.

Everything except ``TemplateError`` is scoped to a single declaration:
the engine reports it and moves on. A missing template means a broken
installation, so it aborts the whole batch.
"""


class GenerationError(Exception):
    """Base class for generation failures."""


class ConfigurationError(GenerationError):
    """Raised when a declaration's resource binding is unusable."""


class ResolutionError(GenerationError):
    """Raised when a resource cannot be found or read in any search root."""

    def __init__(self, package: str, base_name: str, extension: str, reason: str = "not found"):
        self.package = package
        self.base_name = base_name
        self.extension = extension
        self.reason = reason
        where = f"{package}/" if package else ""
        super().__init__(f"Unable to read resource {where}{base_name}.{extension}: {reason}")


class TemplateError(GenerationError):
    """Raised when a named template is missing from the template store."""


class WriteError(GenerationError):
    """Raised when a generated source cannot be created or written."""


class ManifestError(Exception):
    """Raised when a declaration manifest or annotation is malformed."""
