"""
Word wrapper (add_tag).

Finds whole-word occurrences of a word in the text leaves under structural
elements and wraps each one in a new inline element:

    <p>                     <p>
    hello world.     ->     hello
    </p>                    <b>
                            world.
                            </b>
                            </p>

A token matches when it equals the word ignoring case, or when it does so
after dropping one trailing non-letter (so "world." and "World!" match
"world"). The punctuation stays inside the wrapper.
"""

from __future__ import annotations

import logging

from .config import get_config
from .dom import Slot, TagNode

logger = logging.getLogger(__name__)


def token_matches(token: str, word: str) -> bool:
    """Whole-token, case-insensitive match allowing one trailing non-letter."""
    if not token or not word:
        return False
    target = word.lower()
    if token.lower() == target:
        return True
    return not token[-1].isalpha() and token[:-1].lower() == target


def _text_run(tokens: list[str]) -> TagNode:
    # naive re-concatenation: every token keeps its trailing space
    return TagNode("".join(tok + " " for tok in tokens))


def split_leaf(text: str, word: str, tag_label: str) -> list[TagNode]:
    """
    Rebuild a text run as [before] wrapper [between] wrapper ... [after].

    Returns an empty list when no token matches. The returned nodes are not
    linked to each other yet.
    """
    tokens = text.split()
    if not any(token_matches(tok, word) for tok in tokens):
        return []

    nodes: list[TagNode] = []
    pending: list[str] = []
    for tok in tokens:
        if token_matches(tok, word):
            if pending:
                nodes.append(_text_run(pending))
                pending = []
            nodes.append(TagNode(tag_label, first_child=TagNode(tok)))
        else:
            pending.append(tok)
    if pending:
        nodes.append(_text_run(pending))
    return nodes


def _replace_leaf(slot: Slot, leaf: TagNode, nodes: list[TagNode]) -> TagNode:
    """Put the node chain where leaf was. Returns the chain's tail."""
    for prev, nxt in zip(nodes, nodes[1:]):
        prev.next_sibling = nxt
    tail = nodes[-1]
    tail.next_sibling = leaf.next_sibling
    slot.set(nodes[0])
    leaf.next_sibling = None
    return tail


def add_tag(root: TagNode | None, word: str, tag_label: str) -> TagNode | None:
    """
    Wrap every occurrence of word in a tag_label element.

    Only structural elements are descended into. Leaves found along their
    children chains are candidates; a non-structural node with children is
    skipped. Nodes created here are never revisited. Returns the root.
    """
    if root is None or not word.strip():
        logger.info("Edit noop: add_tag empty_input word=%r", word)
        return root

    structural = get_config().labels.structural
    anchor = TagNode("", first_child=root)
    stack = [Slot(anchor, "first_child")]
    wrapped = 0

    while stack:
        slot = stack.pop()
        node = slot.get()
        if node is None:
            continue

        if node.label in structural:
            stack.append(Slot(node, "next_sibling"))
            stack.append(Slot(node, "first_child"))
            continue

        if node.first_child is None:
            nodes = split_leaf(node.label, word, tag_label)
            if nodes:
                tail = _replace_leaf(slot, node, nodes)
                wrapped += sum(1 for n in nodes if not n.is_leaf)
                stack.append(Slot(tail, "next_sibling"))
                continue

        stack.append(Slot(node, "next_sibling"))

    if wrapped:
        logger.info("Edit: add_tag word=%s tag=%s wrapped=%d", word, tag_label, wrapped)
    else:
        logger.info("Edit noop: add_tag word_not_found word=%s", word)
    return anchor.first_child
