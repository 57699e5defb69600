"""Read marked declarations from a YAML manifest.

Manifest shape::

    declarations:
      - name: com.acme.Greeting
        visibility: public          # public | protected | private | default
        file_extension: txt         # optional, default "txt"
        normalize_space: true       # optional, default false
"""

from __future__ import annotations

import re
from pathlib import Path

import yaml

from textresource_engine.declarations.model import (
    DEFAULT_EXTENSION,
    PUBLIC,
    VISIBILITIES,
    MarkedDeclaration,
    ResourceBinding,
)
from textresource_engine.errors import ManifestError

_QUALIFIED_NAME = re.compile(r"^[A-Za-z_$][\w$]*(\.[A-Za-z_$][\w$]*)*$")


def read_manifest(path: Path | str) -> list[MarkedDeclaration]:
    """Read and validate a declaration manifest.

    Args:
        path: Path to the manifest YAML.

    Returns:
        Declarations in manifest order.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ManifestError: If the manifest is not a mapping or an entry is invalid.
    """
    manifest_path = Path(path)
    with open(manifest_path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ManifestError(f"{manifest_path}: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(f"{manifest_path} is not a YAML mapping")

    entries = data.get("declarations", []) or []
    if not isinstance(entries, list):
        raise ManifestError(f"{manifest_path}: 'declarations' must be a list")

    return [parse_entry(entry, index) for index, entry in enumerate(entries)]


def parse_entry(entry: dict, index: int = 0) -> MarkedDeclaration:
    """Turn one manifest entry into a MarkedDeclaration."""
    if not isinstance(entry, dict):
        raise ManifestError(f"declarations[{index}]: expected a mapping")

    name = entry.get("name")
    if not isinstance(name, str) or not _QUALIFIED_NAME.match(name):
        raise ManifestError(f"declarations[{index}]: invalid type name {name!r}")

    visibility = entry.get("visibility", PUBLIC)
    if visibility not in VISIBILITIES:
        raise ManifestError(
            f"{name}: unknown visibility '{visibility}'. "
            f"Valid: {', '.join(VISIBILITIES)}"
        )

    normalize = entry.get("normalize_space", False)
    if not isinstance(normalize, bool):
        raise ManifestError(f"{name}: normalize_space must be true or false")

    # An empty extension is kept as-is; generation reports it per declaration
    extension = entry.get("file_extension", DEFAULT_EXTENSION)
    return MarkedDeclaration(
        qualified_name=name,
        visibility=visibility,
        binding=ResourceBinding(
            file_extension="" if extension is None else str(extension),
            normalize_space=normalize,
        ),
    )
