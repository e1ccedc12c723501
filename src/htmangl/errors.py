"""Errors raised at the command-line boundary.

The merge itself never fails; these cover arguments, reading, strict
parsing and writing.
"""

from __future__ import annotations

_ROLE_LABELS = {"base": "file", "apply": "applied"}


class HtmanglError(Exception):
    exit_code = 1


class UsageError(HtmanglError):
    pass


class ReadError(HtmanglError):
    """An input document could not be read."""

    def __init__(self, role, path, cause):
        self.role = role
        self.path = path
        self.cause = cause
        super().__init__(f"read {_ROLE_LABELS.get(role, role)}: {cause}")


class DocumentParseError(HtmanglError):
    """An input document was rejected by the parser in strict mode."""

    def __init__(self, role, path, cause):
        self.role = role
        self.path = path
        self.cause = cause
        # StrictModeError carries the first justhtml ParseError.
        self.error = getattr(cause, "error", None)
        detail = self.error if self.error is not None else cause
        super().__init__(f"parse {_ROLE_LABELS.get(role, role)}: {path}: {detail}")


class RenderError(HtmanglError):
    def __init__(self, cause):
        self.cause = cause
        super().__init__(f"write output: {cause}")
