"""
DOM - Document Object Model for tagtree

A restricted HTML document is a tree of TagNodes linked first-child /
next-sibling. Each node owns its children chain and the rest of its parent's
children list, so every node is reachable by exactly one path.

Edits never rewrite a raw pointer directly: they resolve a Slot (the link that
holds a node) and reassign it.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

ROOT_LABEL = "html"

STRUCTURAL_LABELS = frozenset({
    "html", "body", "p", "em", "b", "table", "tr", "td", "ol", "ul", "li",
})
LIST_LABELS = frozenset({"ul", "ol"})


class StructuralError(ValueError):
    """A tag line arrived with no open ancestor left on the build stack."""

    def __init__(self, message: str, line_number: int | None = None, line: str | None = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number
        self.line = line


@dataclass(eq=False)
class TagNode:
    """An element (tag name) or a text run, linked first-child / next-sibling."""
    label: str
    first_child: TagNode | None = None
    next_sibling: TagNode | None = None

    @property
    def is_leaf(self) -> bool:
        return self.first_child is None

    def children(self) -> Iterator[TagNode]:
        """Iterate the immediate children chain."""
        return siblings(self.first_child)

    def preorder(self) -> Iterator[TagNode]:
        """Traverse self, its children, then its sibling chain."""
        stack: list[TagNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            if node.next_sibling is not None:
                stack.append(node.next_sibling)
            if node.first_child is not None:
                stack.append(node.first_child)

    def __repr__(self) -> str:
        return f"TagNode({self.label!r}, leaf={self.is_leaf})"


@dataclass(eq=False)
class Slot:
    """A reassignable link: the `attr` field of `owner`."""
    owner: TagNode
    attr: str

    def __post_init__(self):
        if self.attr not in ("first_child", "next_sibling"):
            raise ValueError(f"Slot must name first_child or next_sibling, got {self.attr!r}")

    def get(self) -> TagNode | None:
        return getattr(self.owner, self.attr)

    def set(self, node: TagNode | None) -> None:
        setattr(self.owner, self.attr, node)


def siblings(node: TagNode | None) -> Iterator[TagNode]:
    """Yield node and every node after it on its sibling chain."""
    while node is not None:
        yield node
        node = node.next_sibling


def chain_tail(node: TagNode) -> TagNode:
    """Last node of the sibling chain starting at node."""
    while node.next_sibling is not None:
        node = node.next_sibling
    return node


def find_label(root: TagNode | None, label: str) -> TagNode | None:
    """First node in preorder carrying label."""
    if root is None:
        return None
    for node in root.preorder():
        if node.label == label:
            return node
    return None


def count_label(root: TagNode | None, label: str) -> int:
    """Number of nodes reachable from root carrying label."""
    if root is None:
        return 0
    return sum(1 for node in root.preorder() if node.label == label)
