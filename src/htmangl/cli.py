"""Command-line entry point: ``htmangl BASE APPLY``."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import __version__
from .config import Settings
from .document import dump, read, render
from .errors import HtmanglError, RenderError, UsageError
from .merge import apply


class _ArgumentParser(argparse.ArgumentParser):
    # argparse exits with status 2 on bad arguments; usage errors exit with 1 here.
    def error(self, message):
        raise UsageError(message)


def build_parser():
    parser = _ArgumentParser(
        prog="htmangl",
        description="Combine two HTML files: apply the content of APPLY to the template BASE.",
        epilog=(
            "Use <!-- htmangl:insert --> in BASE to place unmatched applied children at that "
            "point, and <!-- htmangl:copy --> to copy all applied children into the parent."
        ),
    )
    parser.add_argument("base", metavar="BASE", help="template document")
    parser.add_argument("apply", metavar="APPLY", help="document applied to the template")
    parser.add_argument(
        "--output",
        "-o",
        metavar="FILE",
        default=None,
        help="Write the result to FILE instead of standard output",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on the first HTML parse error",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Indent the rendered output",
    )
    parser.add_argument(
        "--tree",
        action="store_true",
        help="Print the merged tree in html5lib test format instead of HTML",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Trace merge decisions on standard error (also HTMANGL_DEBUG=1)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run(settings):
    """Read, merge and render; returns the complete output text."""
    base = read(settings.base, strict=settings.strict, role="base")
    applied = read(settings.applied, strict=settings.strict, role="apply")
    merged = apply(base, applied, debug=settings.debug)
    if settings.tree:
        return dump(merged) + "\n"
    return render(merged, pretty=settings.pretty)


def write(text, output=None):
    try:
        if output is None:
            sys.stdout.write(text)
            sys.stdout.flush()
        else:
            Path(output).write_text(text, encoding="utf-8")
    except OSError as exc:
        raise RenderError(exc) from exc


def main(argv=None):
    parser = build_parser()
    try:
        settings = Settings.from_args(parser.parse_args(argv))
    except UsageError as exc:
        parser.print_usage(sys.stderr)
        print(f"htmangl: error: {exc}", file=sys.stderr)
        return exc.exit_code

    try:
        # Render fully before writing so a failure leaves no partial output.
        write(run(settings), settings.output)
    except HtmanglError as exc:
        print(f"htmangl: {exc}", file=sys.stderr)
        return exc.exit_code
    return 0
