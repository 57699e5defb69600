"""Build layout path resolution.

Resolves the directories the generator reads from and writes to. Uses
environment variables when available, falls back to the conventional
Maven layout relative to the current directory.

Environment variables:
    TEXTRES_SOURCE_DIR — source tree searched first (default: src/main/java)
    TEXTRES_RESOURCE_DIR — compiled-resources tree searched second (default: target/classes)
    TEXTRES_OUTPUT_DIR — generated sources (default: target/generated-sources/annotations)
"""

from __future__ import annotations

import os
from pathlib import Path

_DEFAULT_SOURCE_SUBPATH = "src/main/java"
_DEFAULT_RESOURCE_SUBPATH = "target/classes"
_DEFAULT_OUTPUT_SUBPATH = "target/generated-sources/annotations"

# Extension of every generated source file
SOURCE_EXTENSION = ".java"


def source_root() -> Path:
    """Return the primary search root (original sources)."""
    return Path(os.environ.get("TEXTRES_SOURCE_DIR", _DEFAULT_SOURCE_SUBPATH))


def resource_root() -> Path:
    """Return the secondary search root (compiled or staged resources)."""
    return Path(os.environ.get("TEXTRES_RESOURCE_DIR", _DEFAULT_RESOURCE_SUBPATH))


def output_root() -> Path:
    """Return the directory generated sources are written under."""
    return Path(os.environ.get("TEXTRES_OUTPUT_DIR", _DEFAULT_OUTPUT_SUBPATH))


def package_dir(root: Path, package: str) -> Path:
    """Map a dotted package name onto a directory below ``root``."""
    if not package:
        return root
    return root.joinpath(*package.split("."))


def source_file(root: Path, qualified_name: str) -> Path:
    """Return the ``.java`` path for a qualified type name below ``root``."""
    package, _, simple = qualified_name.rpartition(".")
    return package_dir(root, package) / f"{simple}{SOURCE_EXTENSION}"
