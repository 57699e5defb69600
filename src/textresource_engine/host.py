"""Collaborators the engine writes through: registry, file sink, diagnostics.

These stand in for a compiler's element lookup, filer and messager. They
are bundled into a GenerationContext and handed to the engine explicitly.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from textresource_engine.errors import WriteError
from textresource_engine.paths import source_file
from textresource_engine.resources.resolver import ResourceResolver

logger = logging.getLogger(__name__)

ERROR = "ERROR"
WARNING = "WARNING"
NOTE = "NOTE"

_LEVELS = {ERROR: logging.ERROR, WARNING: logging.WARNING, NOTE: logging.INFO}


class ArtifactRegistry:
    """Answers whether a type already exists.

    A type exists if it was generated by this process, if a generated
    source for it is already in the output directory, or if a hand-written
    source declares it under one of the source roots.
    """

    def __init__(self, output: Path | str, sources: list[Path | str] | None = None):
        self.output = Path(output)
        self.sources = [Path(s) for s in sources or []]
        self._written: set[str] = set()
        self._lock = threading.Lock()

    def lookup_declaration(self, qualified_name: str) -> bool:
        with self._lock:
            if qualified_name in self._written:
                return True
            for root in [self.output] + self.sources:
                if source_file(root, qualified_name).is_file():
                    return True
            return False

    def record(self, qualified_name: str) -> None:
        with self._lock:
            self._written.add(qualified_name)

    @property
    def written(self) -> list[str]:
        with self._lock:
            return sorted(self._written)


class FileSink:
    """Creates generated sources below an output directory."""

    def __init__(self, output: Path | str, encoding: str = "utf-8"):
        self.output = Path(output)
        self.encoding = encoding

    def path_for(self, qualified_name: str) -> Path:
        return source_file(self.output, qualified_name)

    def create_source_file(self, qualified_name: str) -> TextIO:
        """Open a new source file for writing.

        Raises:
            WriteError: If the file already exists or cannot be created.
        """
        path = self.path_for(qualified_name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            return open(path, "x", encoding=self.encoding, newline="\n")
        except FileExistsError as e:
            raise WriteError(f"Attempt to recreate a file for type {qualified_name}") from e
        except OSError as e:
            raise WriteError(f"Unable to create {path}: {e}") from e

    def discard(self, qualified_name: str) -> None:
        """Remove a source whose write failed part way."""
        self.path_for(qualified_name).unlink(missing_ok=True)


@dataclass
class Diagnostic:
    severity: str
    message: str


class DiagnosticSink:
    """Collects diagnostics and mirrors them to the log."""

    def __init__(self):
        self.messages: list[Diagnostic] = []
        self._lock = threading.Lock()

    def report(self, severity: str, message: str) -> None:
        with self._lock:
            self.messages.append(Diagnostic(severity, message))
        logger.log(_LEVELS.get(severity, logging.ERROR), message)

    def errors(self) -> list[str]:
        return [d.message for d in self.messages if d.severity == ERROR]


@dataclass
class GenerationContext:
    """Everything the engine needs for one invocation."""

    resolver: ResourceResolver
    registry: ArtifactRegistry
    sink: FileSink
    diagnostics: DiagnosticSink = field(default_factory=DiagnosticSink)
    workers: int = 1

    @classmethod
    def for_layout(
        cls,
        sources: list[Path | str],
        resources: list[Path | str],
        output: Path | str,
        workers: int = 1,
    ) -> GenerationContext:
        """Build the standard file-system context for a build layout."""
        return cls(
            resolver=ResourceResolver(primary=sources, secondary=resources),
            registry=ArtifactRegistry(output, sources),
            sink=FileSink(output),
            workers=workers,
        )
