"""Parsing and rendering boundary, backed by justhtml."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from justhtml import JustHTML, StrictModeError, to_html, to_test_format

from .errors import DocumentParseError, ReadError
from .merge import apply


def parse(markup: str | bytes, *, strict: bool = False) -> Any:
    """Parse a full HTML document and return its ``#document`` root.

    Parsing is lenient unless ``strict`` is set, in which case the first
    parse error raises ``justhtml.StrictModeError``. Bytes are decoded by
    justhtml (BOM, then ``<meta charset>``, then windows-1252).
    """
    return JustHTML(markup or "", strict=strict).root


def read(path: str | Path, *, strict: bool = False, role: str = "base") -> Any:
    try:
        markup = Path(path).read_bytes()
    except OSError as exc:
        raise ReadError(role, path, exc) from exc
    try:
        return parse(markup, strict=strict)
    except StrictModeError as exc:
        raise DocumentParseError(role, path, exc) from exc


def render(node: Any, *, pretty: bool = False) -> str:
    # Sanitizing would strip comments and attributes the template relies on.
    return to_html(node, pretty=pretty, safe=False)


def dump(node: Any) -> str:
    return to_test_format(node)


def merge_markup(base: str, applied: str, *, strict: bool = False, pretty: bool = False, debug: bool = False) -> str:
    """Parse two documents, merge ``applied`` into ``base`` and render the result."""
    merged = apply(parse(base, strict=strict), parse(applied, strict=strict), debug=debug)
    return render(merged, pretty=pretty)
