"""Marked declarations and their resource bindings."""

from __future__ import annotations

from dataclasses import dataclass, field

from textresource_engine.errors import ConfigurationError

# Visibility levels a marked type may carry
PUBLIC = "public"
PROTECTED = "protected"
PRIVATE = "private"
DEFAULT = "default"

VISIBILITIES = (PUBLIC, PROTECTED, PRIVATE, DEFAULT)

DEFAULT_EXTENSION = "txt"


@dataclass(frozen=True)
class ResourceBinding:
    """The ``@TextResourceAware`` members attached to a declaration."""

    file_extension: str = DEFAULT_EXTENSION
    normalize_space: bool = False

    def extension(self) -> str:
        """Return the validated extension without a leading dot.

        Raises:
            ConfigurationError: If the extension is empty.
        """
        ext = (self.file_extension or "").strip()
        if ext.startswith("."):
            ext = ext[1:]
        if not ext:
            raise ConfigurationError("fileExtension must not be empty")
        return ext


@dataclass(frozen=True)
class MarkedDeclaration:
    """A type carrying ``@TextResourceAware``."""

    qualified_name: str
    visibility: str = PUBLIC
    binding: ResourceBinding = field(default_factory=ResourceBinding)

    @property
    def package(self) -> str:
        return self.qualified_name.rpartition(".")[0]

    @property
    def simple_name(self) -> str:
        return self.qualified_name.rpartition(".")[2]

    def resource_name(self) -> str:
        """Package-relative name of the bound resource, e.g. ``Greeting.txt``."""
        return f"{self.simple_name}.{self.binding.extension()}"
