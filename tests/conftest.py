"""Shared test fixtures for textresource-engine."""

from pathlib import Path

import pytest

from textresource_engine.host import GenerationContext

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def layout(tmp_path):
    """Empty source / compiled-resource / output directories."""
    dirs = {
        "src": tmp_path / "src",
        "classes": tmp_path / "classes",
        "out": tmp_path / "out",
    }
    for d in dirs.values():
        d.mkdir()
    return dirs


@pytest.fixture
def context(layout):
    return GenerationContext.for_layout([layout["src"]], [layout["classes"]], layout["out"])


def write_resource(root: Path, qualified_name: str, extension: str, text: str) -> Path:
    """Place the resource for ``qualified_name`` below ``root``."""
    package, _, simple = qualified_name.rpartition(".")
    path = root.joinpath(*package.split(".")) / f"{simple}.{extension}"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path
