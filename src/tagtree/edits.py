"""
Structural edits on a TagNode tree.

- replace_tag: preorder relabel
- bold_row: wrap the cells of one table row in a bold element
- remove_tag: splice a tag out, promoting its children into its place
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from .config import get_config
from .dom import Slot, TagNode, chain_tail, find_label, siblings

logger = logging.getLogger(__name__)


def replace_tag(root: TagNode | None, old_label: str, new_label: str) -> int:
    """Rename every node labeled old_label. Returns the number renamed."""
    if root is None:
        return 0
    renamed = 0
    for node in root.preorder():
        if node.label == old_label:
            node.label = new_label
            renamed += 1
    if renamed:
        logger.info("Edit: replace_tag %s -> %s renamed=%d", old_label, new_label, renamed)
    else:
        logger.info("Edit noop: replace_tag label_not_found label=%s", old_label)
    return renamed


def bold_row(root: TagNode | None, row: int) -> int:
    """
    Boldface every cell of the given table row (1-indexed).

    Rows are counted across the whole preorder walk, so rows of nested or
    later tables keep incrementing the same counter. Each matching cell gets a
    new bold node as its only child, holding the cell's previous children.
    Returns the number of cells wrapped.
    """
    if root is None or row < 1:
        logger.info("Edit noop: bold_row row_out_of_range row=%s", row)
        return 0

    cfg = get_config().table
    count = 0
    wrapped = 0
    for node in root.preorder():
        if node.label == cfg.row:
            count += 1
        if count == row and node.label == cfg.cell:
            node.first_child = TagNode(cfg.bold, first_child=node.first_child)
            wrapped += 1

    if wrapped:
        logger.info("Edit: bold_row row=%d cells=%d", row, wrapped)
    else:
        logger.info("Edit noop: bold_row row_out_of_range row=%d rows=%d", row, count)
    return wrapped


def _slots_below(root: TagNode) -> Iterator[Slot]:
    """Preorder over every link below root (root's children, then its siblings)."""
    stack = [Slot(root, "next_sibling"), Slot(root, "first_child")]
    while stack:
        slot = stack.pop()
        node = slot.get()
        if node is None:
            continue
        yield slot
        stack.append(Slot(node, "next_sibling"))
        stack.append(Slot(node, "first_child"))


def _find_first(root: TagNode, label: str) -> Slot | None:
    for slot in _slots_below(root):
        if slot.get().label == label:
            return slot
    return None


def _promote_list_items(container: TagNode) -> None:
    labels = get_config().labels
    for child in siblings(container.first_child):
        if child.label == labels.list_item:
            child.label = labels.promoted_item


def _splice_out(slot: Slot) -> None:
    node = slot.get()
    children = node.first_child
    if children is None:
        slot.set(node.next_sibling)
    else:
        chain_tail(children).next_sibling = node.next_sibling
        slot.set(children)
    node.first_child = None
    node.next_sibling = None


def remove_tag(root: TagNode | None, label: str) -> int:
    """
    Remove every occurrence of label below the root.

    The removed node's children take its place among its siblings. Removing a
    list container first turns its immediate list items into paragraphs. The
    root itself is never removed. Returns the number of nodes removed.
    """
    if root is None:
        return 0
    if find_label(root.first_child, label) is None and find_label(root.next_sibling, label) is None:
        logger.info("Edit noop: remove_tag label_not_found label=%s", label)
        return 0

    is_list = label in get_config().labels.list_containers
    removed = 0
    while True:
        slot = _find_first(root, label)
        if slot is None:
            break
        if is_list:
            _promote_list_items(slot.get())
        _splice_out(slot)
        removed += 1

    if removed:
        logger.info("Edit: remove_tag label=%s removed=%d", label, removed)
    else:
        logger.info("Edit noop: remove_tag label_not_found label=%s", label)
    return removed
