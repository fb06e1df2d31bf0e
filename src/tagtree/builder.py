"""
Tree builder.

Turns a line source into a TagNode tree. One line is one token: an opening
tag `<name>`, a closing tag `</name>`, or a run of text. The first line is a
header (the document's own `<html>`) and is discarded; the root is implicit.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from .config import get_config
from .dom import StructuralError, TagNode, chain_tail

logger = logging.getLogger(__name__)


@dataclass
class BuildState:
    """Open-ancestor stack plus the most recently touched node."""
    root: TagNode
    stack: list[TagNode] = field(default_factory=list)
    last: TagNode | None = None

    def __post_init__(self):
        if not self.stack:
            self.stack.append(self.root)
        if self.last is None:
            self.last = self.root


def classify_line(line: str) -> str:
    """Return "close", "open" or "text"."""
    if line.startswith("</"):
        return "close"
    if line.startswith("<"):
        return "open"
    return "text"


def _close(state: BuildState, line_number: int, line: str) -> None:
    if not state.stack:
        raise StructuralError("closing tag with no open ancestor", line_number, line)
    state.last = state.stack.pop()


def _open(state: BuildState, line_number: int, line: str) -> None:
    if not state.stack:
        raise StructuralError("opening tag after the root was closed", line_number, line)
    parent = state.stack[-1]
    node = TagNode(line[1:-1])
    if parent.first_child is None:
        parent.first_child = node
    else:
        chain_tail(parent.first_child).next_sibling = node
    state.stack.append(node)
    state.last = node


def _text(state: BuildState, line: str) -> None:
    node = TagNode(line)
    last = state.last
    # text after a filled node replaces its sibling link without walking the chain
    if last.first_child is not None:
        last.next_sibling = node
    else:
        last.first_child = node
        state.last = node


def feed_line(state: BuildState, line: str, line_number: int = 0) -> None:
    """Apply one line to the build state."""
    kind = classify_line(line)
    if kind == "close":
        _close(state, line_number, line)
    elif kind == "open":
        _open(state, line_number, line)
    else:
        _text(state, line)


def build_tree(lines: Iterable[str]) -> TagNode | None:
    """
    Build a tree from a line source.

    Returns None when the source is empty. Trailing whitespace-only lines are
    ignored; a whitespace-only line followed by more content is a text line.
    """
    source = iter(lines)
    try:
        next(source)  # header
    except StopIteration:
        return None

    state = BuildState(root=TagNode(get_config().labels.root))
    pending_blank: list[tuple[int, str]] = []
    count = 0

    for line_number, raw in enumerate(source, start=2):
        line = raw.rstrip("\r\n")
        if not line.strip():
            pending_blank.append((line_number, line))
            continue
        for blank_number, blank in pending_blank:
            feed_line(state, blank, blank_number)
            count += 1
        pending_blank.clear()
        feed_line(state, line, line_number)
        count += 1

    if state.stack:
        logger.debug("Build: %d tag(s) left open at end of input", len(state.stack))
    logger.debug("Build: consumed %d line(s) after header", count)
    return state.root
