"""Locate and read the text resource bound to a declaration.

The same build can run against the original source tree or against a
staged copy where resources only exist in the compiled output, so lookup
tries the primary roots first and falls back to the secondary roots when
(and only when) the resource is simply not there.
"""

from __future__ import annotations

import logging
from pathlib import Path

from textresource_engine.errors import ResolutionError
from textresource_engine.paths import package_dir

logger = logging.getLogger(__name__)


class ResourceResolver:
    """Two-tier resource lookup: primary roots, then secondary roots."""

    def __init__(
        self,
        primary: list[Path | str],
        secondary: list[Path | str] | None = None,
        encoding: str = "utf-8",
    ):
        self.primary = [Path(p) for p in primary]
        self.secondary = [Path(p) for p in secondary or []]
        self.encoding = encoding

    def resolve(self, package: str, base_name: str, extension: str) -> str:
        """Return the text of ``<package>/<base_name>.<extension>``.

        Raises:
            ResolutionError: If no root holds the resource, or reading it
                fails for any reason other than it being absent.
        """
        filename = f"{base_name}.{extension}"
        for root in self.primary + self.secondary:
            path = package_dir(root, package) / filename
            try:
                with open(path, encoding=self.encoding, newline="") as f:
                    text = f.read()
            except FileNotFoundError:
                logger.debug("Resource %s not under %s", filename, root)
                continue
            except (OSError, UnicodeDecodeError) as e:
                raise ResolutionError(package, base_name, extension, str(e)) from e
            logger.debug("Resolved %s from %s", filename, path)
            return text

        raise ResolutionError(package, base_name, extension)
