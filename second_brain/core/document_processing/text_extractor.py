"""
Plain-text extraction from editor document trees.

Flattens a nested block tree (blocks, children, inline content) into
normalized plain text. Any node may carry a string ``text`` leaf and child
lists under ``content``, ``children`` or ``blocks``.

Dependencies: re
System role: First stage of note indexing
"""

import re
from typing import Any

from .models import TextSegment

CHILD_KEYS = ("content", "children", "blocks")
PAGE_NUMBER_KEY = "pageNumber"

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_whitespace(text: str | None) -> str:
    """Collapse whitespace runs to one space and trim."""
    return _WHITESPACE_RE.sub(" ", text or "").strip()


def collect_text(node: Any) -> list[str]:
    """
    Collect leaf text depth-first, left to right.

    Args:
        node: Tree node (dict, list, str or None)

    Returns:
        list[str]: Text fragments in document order
    """
    if node is None:
        return []
    if isinstance(node, str):
        return [node]
    if isinstance(node, list):
        return [part for child in node for part in collect_text(child)]
    if not isinstance(node, dict):
        return []

    parts: list[str] = []
    if isinstance(node.get("text"), str):
        parts.append(node["text"])
    for key in CHILD_KEYS:
        children = node.get(key)
        if isinstance(children, list):
            parts.extend(collect_text(children))
    return parts


def extract_plain_text(tree: Any) -> str:
    """
    Flatten a document tree into one whitespace-normalized string.

    Args:
        tree: Editor content tree

    Returns:
        str: Normalized text, empty when the tree holds no text
    """
    return normalize_whitespace(" ".join(collect_text(tree)))


def extract_pages(tree: Any) -> list[TextSegment]:
    """
    Split a document tree into page-tagged segments.

    Uploaded PDFs are stored with one top-level block per page carrying a
    ``pageNumber``; those yield one segment per non-empty page. Any other
    tree yields a single untagged segment (or none when it holds no text).

    Args:
        tree: Editor or PDF content tree

    Returns:
        list[TextSegment]: Segments in document order
    """
    blocks = tree.get("blocks") if isinstance(tree, dict) else None
    if isinstance(blocks, list) and blocks and all(
        isinstance(block, dict) and isinstance(block.get(PAGE_NUMBER_KEY), int)
        for block in blocks
    ):
        segments = []
        for block in blocks:
            text = extract_plain_text(block)
            if text:
                segments.append(TextSegment(text=text, page_number=block[PAGE_NUMBER_KEY]))
        return segments

    text = extract_plain_text(tree)
    return [TextSegment(text=text)] if text else []
