"""Declarations module — the marked types fed to the generator."""

from textresource_engine.declarations.discover import discover_declarations, scan_source
from textresource_engine.declarations.manifest import read_manifest
from textresource_engine.declarations.model import MarkedDeclaration, ResourceBinding

__all__ = [
    "MarkedDeclaration",
    "ResourceBinding",
    "discover_declarations",
    "read_manifest",
    "scan_source",
]
