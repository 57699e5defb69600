"""Command line for the text resource provider generator.

Usage:
    textres generate [--manifest <file>] [--workers N]
    textres plan [--manifest <file>]
    textres scan

Global options:
    --source-root <dir>     primary search root, repeatable
    --resource-root <dir>   fallback search root, repeatable
    --output <dir>          generated sources directory
    -v / --verbose          debug logging
"""

import argparse
import logging
import sys
from pathlib import Path

from textresource_engine.cli.generate import cmd_generate, cmd_plan
from textresource_engine.cli.scan import cmd_scan
from textresource_engine.declarations import discover_declarations, read_manifest
from textresource_engine.declarations.model import MarkedDeclaration
from textresource_engine.paths import output_root, resource_root, source_root


def resolve_layout(args: argparse.Namespace) -> tuple[list[Path], list[Path], Path]:
    """Return (source roots, resource roots, output dir) from args or environment."""
    sources = [Path(p) for p in args.source_root] if args.source_root else [source_root()]
    resources = [Path(p) for p in args.resource_root] if args.resource_root else [resource_root()]
    output = Path(args.output) if args.output else output_root()
    return sources, resources, output


def load_declarations(args: argparse.Namespace) -> list[MarkedDeclaration]:
    """Read declarations from --manifest, or scan the source roots."""
    manifest = getattr(args, "manifest", None)
    if manifest:
        return read_manifest(manifest)
    sources, _, _ = resolve_layout(args)
    return discover_declarations(sources)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="textres",
        description="Generate text resource providers for @TextResourceAware types",
    )
    parser.add_argument(
        "--source-root", action="append", default=None,
        help="Source tree searched first (repeatable, default: $TEXTRES_SOURCE_DIR)",
    )
    parser.add_argument(
        "--resource-root", action="append", default=None,
        help="Compiled resources searched second (repeatable, default: $TEXTRES_RESOURCE_DIR)",
    )
    parser.add_argument(
        "--output", default=None,
        help="Generated sources directory (default: $TEXTRES_OUTPUT_DIR)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    sub = parser.add_subparsers(dest="command")

    gen = sub.add_parser("generate", help="Generate missing providers")
    gen.add_argument(
        "--manifest", default=None,
        help="YAML manifest of declarations (default: scan source roots)",
    )
    gen.add_argument(
        "--workers", type=int, default=1,
        help="Declarations processed in parallel (default 1)",
    )

    pl = sub.add_parser("plan", help="Show provider targets and whether they exist")
    pl.add_argument(
        "--manifest", default=None,
        help="YAML manifest of declarations (default: scan source roots)",
    )

    sub.add_parser("scan", help="List @TextResourceAware types in the source roots")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s  %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 0

    dispatch = {
        "generate": cmd_generate,
        "plan": cmd_plan,
        "scan": cmd_scan,
    }
    return dispatch[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
