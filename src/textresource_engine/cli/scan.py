"""Scan CLI command."""

import argparse
import sys


def cmd_scan(args: argparse.Namespace) -> int:
    from textresource_engine.cli import resolve_layout
    from textresource_engine.declarations.discover import discover_declarations
    from textresource_engine.errors import ManifestError

    sources, _, _ = resolve_layout(args)
    try:
        declarations = discover_declarations(sources)
    except (OSError, UnicodeDecodeError, ManifestError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(f"Found {len(declarations)} @TextResourceAware type(s):\n")
    for d in declarations:
        flags = " normalizeSpace" if d.binding.normalize_space else ""
        ext = d.binding.file_extension or "<empty>"
        print(f"  {d.qualified_name} ({d.visibility}, .{ext}{flags})")
    return 0
