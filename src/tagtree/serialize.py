"""
Serialize a TagNode tree back to the one-token-per-line text form.

A childless node is written as its label; a node with children is written as
`<label>`, its children, `</label>`. Every token ends with a newline.
"""

from __future__ import annotations

from .dom import TagNode


def iter_lines(root: TagNode | None):
    """Yield output lines (without newlines) for root and its sibling chain."""
    # (node, closing) pairs; closing entries emit the end tag
    stack: list[tuple[TagNode, bool]] = [(root, False)] if root is not None else []
    while stack:
        node, closing = stack.pop()
        if closing:
            yield f"</{node.label}>"
            continue
        if node.next_sibling is not None:
            stack.append((node.next_sibling, False))
        if node.first_child is None:
            yield node.label
        else:
            yield f"<{node.label}>"
            stack.append((node, True))
            stack.append((node.first_child, False))


def get_html(root: TagNode | None) -> str:
    """Serialize the tree. An empty tree gives ""."""
    return "".join(line + "\n" for line in iter_lines(root))
