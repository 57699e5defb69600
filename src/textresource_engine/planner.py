"""Plan the providers to generate for a marked declaration."""

from __future__ import annotations

from dataclasses import dataclass

from textresource_engine import EMBEDDED_SUFFIX, PROVIDER_SUFFIX
from textresource_engine.declarations.model import (
    PRIVATE,
    PROTECTED,
    PUBLIC,
    MarkedDeclaration,
)
from textresource_engine.templates.store import EMBEDDED_LITERAL, RUNTIME_LOADING

# Strategy → suffix appended to the marked type's simple name
STRATEGY_SUFFIXES = {
    RUNTIME_LOADING: PROVIDER_SUFFIX,
    EMBEDDED_LITERAL: PROVIDER_SUFFIX + EMBEDDED_SUFFIX,
}


@dataclass(frozen=True)
class GenerationTarget:
    """One provider to be generated for one declaration."""

    strategy: str
    declaration: MarkedDeclaration

    @property
    def simple_name(self) -> str:
        return self.declaration.simple_name + STRATEGY_SUFFIXES[self.strategy]

    @property
    def package(self) -> str:
        return self.declaration.package

    @property
    def qualified_name(self) -> str:
        return self.declaration.qualified_name + STRATEGY_SUFFIXES[self.strategy]


def plan(declaration: MarkedDeclaration) -> list[GenerationTarget]:
    """Return the lazy-loading target followed by the embedded-literal target."""
    return [
        GenerationTarget(RUNTIME_LOADING, declaration),
        GenerationTarget(EMBEDDED_LITERAL, declaration),
    ]


def exists(target: GenerationTarget, registry) -> bool:
    """Check the registry for a type already named like ``target``."""
    return registry.lookup_declaration(target.qualified_name)


def visibility_keyword(visibility: str) -> str:
    """Map a declaration's visibility onto the provider's Java modifier.

    Package-visible types have no keyword.
    """
    if visibility == PUBLIC:
        return "public"
    if visibility == PROTECTED:
        return "protected"
    if visibility == PRIVATE:
        return "private"
    # DEFAULT: package visible
    return ""
