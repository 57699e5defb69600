"""Discover ``@TextResourceAware`` types by scanning Java sources.

Structure: <source root>/<package dirs>/<Type>.java

Only the annotation's literal members are understood::

    @TextResourceAware(fileExtension = "md", normalizeSpace = true)
    public class Greeting { ... }
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from textresource_engine import ANNOTATION
from textresource_engine.declarations.model import (
    DEFAULT,
    DEFAULT_EXTENSION,
    PRIVATE,
    PROTECTED,
    PUBLIC,
    MarkedDeclaration,
    ResourceBinding,
)
from textresource_engine.errors import ManifestError

logger = logging.getLogger(__name__)

_TOKENS = re.compile(
    r'(?P<text>"""[\s\S]*?""")'
    r'|(?P<string>"(?:[^"\\\n]|\\.)*")'
    r"|(?P<char>'(?:[^'\\\n]|\\.)+')"
    r"|(?P<comment>//[^\n]*|/\*[\s\S]*?\*/)"
)
_PACKAGE = re.compile(r"^\s*package\s+([\w.]+)\s*;", re.MULTILINE)
_MODIFIERS = r"(?:\s*(?:@[\w.]+(?:\s*\([^)]*\))?|public|protected|private|abstract|final|static|strictfp|sealed|non-sealed))*"
_MARKED_TYPE = re.compile(
    r"@(?:[\w.]+\.)?" + ANNOTATION + r"\b(?:\s*\((?P<args>[^)]*)\))?"
    r"(?P<mods>" + _MODIFIERS + r")"
    r"\s*(?:class|interface|enum|record)\s+(?P<name>\w+)"
)
_MEMBER = re.compile(r"\s*(\w+)\s*=\s*(\"(?:[^\"\\]|\\.)*\"|[^,]*?)\s*(?:,|$)")
_STRING = re.compile(r"\"(?:[^\"\\]|\\.)*\"")
_LEADING = re.compile(_MODIFIERS + r"\s*$")


def discover_declarations(
    roots: list[Path | str],
) -> list[MarkedDeclaration]:
    """Walk source roots and collect every marked type.

    Args:
        roots: Source directories to scan. Missing directories are skipped.

    Returns:
        Declarations sorted by qualified name. The first root wins when
        the same type appears under several roots.
    """
    found: dict[str, MarkedDeclaration] = {}
    for root in roots:
        root_dir = Path(root)
        if not root_dir.is_dir():
            logger.debug("Skipping missing source root %s", root_dir)
            continue
        for source in sorted(root_dir.rglob("*.java")):
            for declaration in scan_source(source.read_text(encoding="utf-8"), source):
                found.setdefault(declaration.qualified_name, declaration)

    return [found[name] for name in sorted(found)]


def scan_source(text: str, origin: Path | str = "<source>") -> list[MarkedDeclaration]:
    """Return the top-level marked types declared in one Java compilation unit.

    Marked types nested inside another type are skipped.
    """
    code, masked = _strip(text)
    package_match = _PACKAGE.search(masked)
    package = package_match.group(1) if package_match else ""

    declarations = []
    for match in _MARKED_TYPE.finditer(masked):
        name = match.group("name")
        qualified = f"{package}.{name}" if package else name
        if _depth(masked, match.start()) > 0:
            logger.debug("Skipping nested marked type %s in %s", name, origin)
            continue
        args = code[match.start("args"):match.end("args")] if match.group("args") else ""
        try:
            binding = _parse_members(args)
        except ManifestError as e:
            raise ManifestError(f"{origin}: {qualified}: {e}") from e
        modifiers = _leading_modifiers(masked, match.start()) + " " + match.group("mods")
        declarations.append(MarkedDeclaration(
            qualified_name=qualified,
            visibility=_visibility(modifiers),
            binding=binding,
        ))
        logger.debug("Found marked type %s in %s", qualified, origin)
    return declarations


def _strip(text: str) -> tuple[str, str]:
    """Drop comments, and return (code, code with literal contents blanked).

    Both strings share offsets, so a match in the blanked copy can be read
    back from the code.
    """
    code = []
    masked = []
    pos = 0
    for match in _TOKENS.finditer(text):
        code.append(text[pos:match.start()])
        masked.append(text[pos:match.start()])
        token = match.group(0)
        if match.group("comment"):
            code.append(" ")
            masked.append(" ")
        else:
            quote = 3 if match.group("text") else 1
            code.append(token)
            masked.append(token[:quote] + " " * (len(token) - 2 * quote) + token[-quote:])
        pos = match.end()
    code.append(text[pos:])
    masked.append(text[pos:])
    return "".join(code), "".join(masked)


def _depth(masked: str, offset: int) -> int:
    prefix = masked[:offset]
    return prefix.count("{") - prefix.count("}")


def _leading_modifiers(masked: str, offset: int) -> str:
    """Modifiers and annotations written before the marker annotation."""
    start = max(masked.rfind(c, 0, offset) for c in ";{}") + 1
    prefix = _LEADING.search(masked[start:offset])
    return prefix.group(0) if prefix else ""


def _visibility(modifiers: str) -> str:
    words = set(re.findall(r"(?<![@\w.])\w+", modifiers))
    if PUBLIC in words:
        return PUBLIC
    if PROTECTED in words:
        return PROTECTED
    if PRIVATE in words:
        return PRIVATE
    return DEFAULT


def _parse_members(args: str) -> ResourceBinding:
    extension = DEFAULT_EXTENSION
    normalize = False
    pos = 0
    while args[pos:].strip():
        match = _MEMBER.match(args, pos)
        if not match:
            raise ManifestError(f"cannot read annotation arguments '{args.strip()}'")
        key, value = match.group(1), match.group(2)
        if key == "fileExtension":
            if not _STRING.fullmatch(value):
                raise ManifestError(f"fileExtension must be a string literal, not '{value}'")
            extension = value[1:-1]
        elif key == "normalizeSpace":
            if value not in ("true", "false"):
                raise ManifestError(f"normalizeSpace must be true or false, not '{value}'")
            normalize = value == "true"
        else:
            raise ManifestError(f"unknown annotation member '{key}'")
        pos = match.end()
    return ResourceBinding(file_extension=extension, normalize_space=normalize)
