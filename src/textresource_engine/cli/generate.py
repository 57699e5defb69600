"""Generate and plan CLI commands."""

import argparse
import sys


def cmd_generate(args: argparse.Namespace) -> int:
    from textresource_engine.cli import load_declarations, resolve_layout
    from textresource_engine.engine import generate
    from textresource_engine.errors import ManifestError, TemplateError
    from textresource_engine.host import GenerationContext

    try:
        declarations = load_declarations(args)
    except (OSError, UnicodeDecodeError, ManifestError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    sources, resources, output = resolve_layout(args)
    context = GenerationContext.for_layout(
        sources, resources, output, workers=max(1, args.workers),
    )

    try:
        report = generate(declarations, context)
    except TemplateError as e:
        print(f"ERROR: broken installation: {e}", file=sys.stderr)
        return 2

    print(report.summary())
    return 0 if report.ok else 1


def cmd_plan(args: argparse.Namespace) -> int:
    from textresource_engine.cli import load_declarations, resolve_layout
    from textresource_engine.errors import ManifestError
    from textresource_engine.host import ArtifactRegistry
    from textresource_engine.planner import exists, plan

    try:
        declarations = load_declarations(args)
    except (OSError, UnicodeDecodeError, ManifestError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    sources, _, output = resolve_layout(args)
    registry = ArtifactRegistry(output, sources)

    if not declarations:
        print("No marked declarations found.")
        return 0

    print(f"\n  {'Target':<60} {'Strategy':<18} {'State':<8}")
    print(f"  {'─' * 86}")
    for declaration in declarations:
        for target in plan(declaration):
            state = "exists" if exists(target, registry) else "missing"
            print(f"  {target.qualified_name:<60} {target.strategy:<18} {state:<8}")
    print(f"\n  {len(declarations)} declaration(s)")
    return 0
