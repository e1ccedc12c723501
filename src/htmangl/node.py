"""Clone and transfer helpers for justhtml DOM nodes."""

from __future__ import annotations

from typing import Any

from justhtml.node import ElementNode, SimpleDomNode, TemplateNode, TextNode

INSERT_DIRECTIVE = "htmangl:insert"
COPY_DIRECTIVE = "htmangl:copy"

_LEAF_NAMES = frozenset({"#text", "#comment", "!doctype"})
_ROOT_NAMES = frozenset({"#document", "#document-fragment"})


def _container(node: Any) -> Any:
    # HTML templates keep their contents in a separate fragment.
    if type(node) is TemplateNode and node.template_content is not None:
        return node.template_content
    return node


def child_nodes(node: Any) -> list[Any]:
    """Return the children the merge sees for ``node`` (never None)."""
    if node.name in _LEAF_NAMES:
        return []
    return _container(node).children or []


def append(parent: Any, child: Any) -> None:
    _container(parent).append_child(child)


def match_key(node: Any) -> str:
    """Key used to pair base and applied siblings.

    Elements pair by tag name. Text and comments use their data, doctypes
    their name, so a ``<!DOCTYPE html>`` shares the key of ``<html>``.
    """
    name = node.name
    if name in {"#text", "#comment"}:
        return node.data or ""
    if name == "!doctype":
        doctype = node.data
        return (doctype.name if doctype is not None else None) or ""
    return name


def is_element(node: Any) -> bool:
    name = node.name
    return name not in _LEAF_NAMES and name not in _ROOT_NAMES


def directive(node: Any) -> str | None:
    """Return "insert" or "copy" for directive comments, else None."""
    if node.name != "#comment":
        return None
    text = (node.data or "").strip()
    if text == INSERT_DIRECTIVE:
        return "insert"
    if text == COPY_DIRECTIVE:
        return "copy"
    return None


def clone_node(node: Any) -> Any:
    """Shallow clone: same kind, name, namespace, data and attributes, no children.

    The attribute dict is copied so the clone never shares it with ``node``.
    """
    name = node.name
    if name == "#text":
        return TextNode(node.data)
    if name in {"#comment", "!doctype"}:
        return SimpleDomNode(name, data=node.data)
    if name in _ROOT_NAMES:
        return SimpleDomNode(name)

    attrs = dict(node.attrs) if node.attrs else {}
    if type(node) is TemplateNode:
        return TemplateNode(name, attrs, namespace=node.namespace)
    return ElementNode(name, attrs, node.namespace)


def clone_tree(node: Any) -> Any:
    """Shallow clone of ``node`` that takes over all of its children.

    Children are moved, not copied: they are detached from ``node`` one by
    one and appended to the clone, leaving ``node`` empty.
    """
    clone = clone_node(node)
    if node.name in _LEAF_NAMES:
        return clone

    source = _container(node)
    target = _container(clone)
    while source.children:
        child = source.children[0]
        source.remove_child(child)
        target.append_child(child)
    return clone


def has_directive(node: Any) -> bool:
    """True if ``node`` or any descendant is a directive comment."""
    stack = [node]
    while stack:
        current = stack.pop()
        if directive(current) is not None:
            return True
        stack.extend(child_nodes(current))
    return False
