"""
Tree facade: one document, built once from a line source, then edited and
serialized in place.

    tree = Tree.from_path("page.html")
    tree.build()
    tree.bold_row(2)
    tree.remove_tag("ul")
    tree.add_tag("world", "em")
    print(tree.get_html())
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from . import edits, wrap
from .builder import build_tree
from .config import get_config
from .dom import TagNode
from .serialize import get_html


class Tree:
    """An HTML DOM tree of TagNodes, with the edit operations bound to it."""

    def __init__(self, lines: Iterable[str] | None = None):
        self.lines = lines
        self.root: TagNode | None = None

    @classmethod
    def from_text(cls, text: str) -> Tree:
        # only "\n" ends a line; other line-break characters are text
        return cls(text.split("\n") if text else [])

    @classmethod
    def from_path(cls, path: str | Path, encoding: str | None = None) -> Tree:
        encoding = encoding or get_config().io.encoding
        return cls.from_text(Path(path).read_text(encoding=encoding))

    def build(self) -> None:
        """Build the tree from the line source; root stays None for an empty source."""
        self.root = None
        if self.lines is None:
            return
        self.root = build_tree(self.lines)

    def replace_tag(self, old_tag: str, new_tag: str) -> None:
        edits.replace_tag(self.root, old_tag, new_tag)

    def bold_row(self, row: int) -> None:
        """Boldface every column of the given row (first row is 1)."""
        edits.bold_row(self.root, row)

    def remove_tag(self, tag: str) -> None:
        edits.remove_tag(self.root, tag)

    def add_tag(self, word: str, tag: str) -> None:
        self.root = wrap.add_tag(self.root, word, tag)

    def get_html(self) -> str:
        return get_html(self.root)
