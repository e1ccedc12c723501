"""Merge an applied document into a base document.

Siblings are paired by tag name one level at a time; paired elements are
merged recursively. Two comment directives steer placement:

* ``<!-- htmangl:insert -->`` marks where unmatched applied children go
  (by default they are appended after all base children).
* ``<!-- htmangl:copy -->`` stops the merge at that level and appends every
  applied child, matched or not.

Both input trees are consumed: children are moved into the result rather
than copied, so callers must not reuse the inputs after merging.
"""

from __future__ import annotations

import sys
from typing import Any

from .config import env_flag
from .node import append, child_nodes, clone_node, clone_tree, directive, is_element, match_key
from .ordered_map import OrderedMap


class Merger:
    __slots__ = ("env_debug",)

    def __init__(self, *, debug: bool = False) -> None:
        self.env_debug = bool(debug) or env_flag("HTMANGL_DEBUG")

    def debug(self, message: str, indent: int = 0) -> None:
        if self.env_debug:
            print(f"{' ' * indent}{message}", file=sys.stderr)

    def apply(self, base: Any, applied: Any, depth: int = 0) -> Any:
        indent = depth * 2
        to_apply = OrderedMap()
        for node in child_nodes(applied):
            to_apply.set(match_key(node), node)

        if len(to_apply) == 0:
            self.debug(f"[apply-empty] {base.name}", indent)
            return clone_tree(base)

        base_children = child_nodes(base)
        if not base_children:
            self.debug(f"[base-empty] {base.name}", indent)
            return clone_tree(applied)

        result = clone_node(base)
        before: list[Any] = []
        after: list[Any] = []
        seen_insert = False
        seen_copy = False

        for node in base_children:
            kind = directive(node)
            if kind == "insert":
                self.debug("[insert-marker]", indent)
                seen_insert = True
                continue
            if kind == "copy":
                self.debug("[copy-marker]", indent)
                seen_copy = True
                break

            key = match_key(node)
            match = to_apply.get(key) if is_element(node) else None
            if match is not None:
                self.debug(f"[match] {key}", indent)
                to_apply.delete(key)
                merged = self.apply(node, match, depth + 1)
            else:
                self.debug(f"[keep] {node.name}", indent)
                merged = clone_tree(node)
            (after if seen_insert else before).append(merged)

        if seen_copy:
            for node in child_nodes(base):
                if directive(node) == "copy":
                    continue
                append(result, clone_node(node))
            for node in child_nodes(applied):
                self.debug(f"[append] {node.name}", indent)
                append(result, clone_tree(node))
            return result

        for node in before:
            append(result, node)
        for node in to_apply.values():
            self.debug(f"[append] {node.name}", indent)
            append(result, clone_tree(node))
        for node in after:
            append(result, node)
        return result


def apply(base: Any, applied: Any, *, debug: bool = False) -> Any:
    """Merge ``applied`` into ``base`` and return the new root.

    Both arguments are consumed and must not be used afterwards.
    """
    return Merger(debug=debug).apply(base, applied)
