"""Run settings assembled from command-line arguments and the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

_TRUTHY = {"1", "true", "yes"}


def env_flag(name: str, environ: Any = None) -> bool:
    environ = os.environ if environ is None else environ
    return environ.get(name, "").lower() in _TRUTHY


@dataclass(frozen=True)
class Settings:
    base: str
    applied: str
    output: str | None = None
    strict: bool = False
    pretty: bool = False
    debug: bool = False
    tree: bool = False

    @classmethod
    def from_args(cls, args: Any, environ: Any = None) -> Settings:
        return cls(
            base=args.base,
            applied=args.apply,
            output=args.output,
            strict=args.strict,
            pretty=args.pretty,
            debug=args.debug or env_flag("HTMANGL_DEBUG", environ),
            tree=args.tree,
        )
