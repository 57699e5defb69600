"""Provider generation engine.

For each marked declaration:
1. Plan the lazy-loading and embedded-literal targets
2. Skip every target whose type already exists
3. Resolve the bound resource, normalize it for the embedded provider
   when asked to, render the strategy's template, and write the source

A failure is reported against its declaration and the batch carries on.
Only a missing template stops the batch.
"""

from __future__ import annotations

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from textresource_engine.declarations.model import MarkedDeclaration
from textresource_engine.errors import ConfigurationError, GenerationError, TemplateError, WriteError
from textresource_engine.host import ERROR, GenerationContext
from textresource_engine.planner import GenerationTarget, exists, plan, visibility_keyword
from textresource_engine.templates.render import render
from textresource_engine.templates.store import EMBEDDED_LITERAL

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


@dataclass
class DeclarationOutcome:
    """What happened to one declaration."""

    name: str
    written: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class GenerationReport:
    """Outcomes for a whole batch, in input order."""

    outcomes: list[DeclarationOutcome] = field(default_factory=list)

    @property
    def written(self) -> list[str]:
        return [name for o in self.outcomes for name in o.written]

    @property
    def skipped(self) -> list[str]:
        return [name for o in self.outcomes for name in o.skipped]

    @property
    def errors(self) -> list[dict[str, str]]:
        return [{"name": o.name, "error": o.error} for o in self.outcomes if o.error]

    @property
    def ok(self) -> bool:
        return all(o.ok for o in self.outcomes)

    def summary(self) -> str:
        lines = [
            f"Providers: {len(self.outcomes)} declarations, "
            f"{len(self.written)} written, {len(self.skipped)} skipped",
        ]
        for name in self.written:
            lines.append(f"  + {name}")
        if self.errors:
            lines.append(f"\nErrors: {len(self.errors)}")
            for e in self.errors:
                lines.append(f"  {e['name']}: {e['error']}")
        return "\n".join(lines)


def generate(
    declarations: list[MarkedDeclaration],
    context: GenerationContext,
) -> GenerationReport:
    """Generate the missing providers for every declaration.

    Args:
        declarations: Marked declarations for this invocation.
        context: Resolver, registry, sink and diagnostics to work through.

    Returns:
        GenerationReport with one outcome per declaration.

    Raises:
        TemplateError: If a provider template is missing from the store.
    """
    if context.workers > 1 and len(declarations) > 1:
        with ThreadPoolExecutor(max_workers=context.workers) as pool:
            outcomes = list(pool.map(lambda d: process_declaration(d, context), declarations))
    else:
        outcomes = [process_declaration(d, context) for d in declarations]

    report = GenerationReport(outcomes)
    logger.info(
        "Generated %d provider(s), skipped %d, %d declaration(s) failed",
        len(report.written), len(report.skipped), len(report.errors),
    )
    return report


def process_declaration(
    declaration: MarkedDeclaration,
    context: GenerationContext,
) -> DeclarationOutcome:
    """Plan and generate both providers for a single declaration."""
    outcome = DeclarationOutcome(declaration.qualified_name)
    try:
        validate(declaration)
        for target in plan(declaration):
            if exists(target, context.registry):
                logger.debug("%s already exists, skipping", target.qualified_name)
                outcome.skipped.append(target.qualified_name)
                continue
            generate_target(target, context)
            outcome.written.append(target.qualified_name)
    except TemplateError:
        raise
    except GenerationError as e:
        outcome.error = str(e)
        context.diagnostics.report(ERROR, f"{declaration.qualified_name}: {e}")
    except Exception as e:
        outcome.error = f"{type(e).__name__}: {e}"
        context.diagnostics.report(ERROR, f"{declaration.qualified_name}: {outcome.error}")
    return outcome


def validate(declaration: MarkedDeclaration) -> None:
    """Reject declarations whose providers could not be generated.

    Raises:
        ConfigurationError: On an empty file extension or a type in the
            default package.
    """
    declaration.binding.extension()
    if not declaration.package:
        raise ConfigurationError("types in the default package are not supported")


def generate_target(target: GenerationTarget, context: GenerationContext) -> None:
    """Resolve, render and write one provider."""
    declaration = target.declaration
    binding = declaration.binding
    text = context.resolver.resolve(
        declaration.package, declaration.simple_name, binding.extension(),
    )

    bindings = {
        "$PACKAGE": target.package,
        "$NAME": target.simple_name,
        "$VISIBILITY": _modifier(declaration.visibility),
        "$RESOURCE": declaration.resource_name(),
        "$TYPE": declaration.qualified_name,
    }
    if target.strategy == EMBEDDED_LITERAL:
        bindings["$TEXT"] = normalize_space(text) if binding.normalize_space else text

    source = render(target.strategy, bindings)
    write_source(target.qualified_name, source, context)


def write_source(qualified_name: str, source: str, context: GenerationContext) -> None:
    """Write one generated source; a partially written file is removed."""
    writer = context.sink.create_source_file(qualified_name)
    try:
        with writer:
            writer.write(source)
            writer.flush()
    except OSError as e:
        context.sink.discard(qualified_name)
        raise WriteError(f"Unable to write {qualified_name}: {e}") from e

    context.registry.record(qualified_name)
    logger.info("Wrote %s", qualified_name)


def normalize_space(text: str) -> str:
    """Collapse every run of whitespace, newlines included, to one space."""
    return _WHITESPACE.sub(" ", text)


def _modifier(visibility: str) -> str:
    keyword = visibility_keyword(visibility)
    return f"{keyword} " if keyword else ""
