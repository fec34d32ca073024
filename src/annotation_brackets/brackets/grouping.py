"""Annotation candidates and grouping of adjacent candidates.

A group is the maximal run of candidate emphasis elements under one parent
whose in-between content carries no letters, e.g. ``<i>one</i> <i>two</i>``
or ``<i>one</i>, <i>two</i>``. Each group receives a single bracket pair.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from annotation_brackets.brackets.classifier import has_letters
from annotation_brackets.brackets.dom import is_element, visible_text
from annotation_brackets.marker_constants import (
    EMPHASIS_TAGS,
    EXCLUDED_CLASS,
    PROCESSED_ATTR,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from lxml.html import HtmlElement


def is_emphasis(node: object) -> bool:
    """Return True for an ``<i>``/``<em>`` element, processed or not."""
    return is_element(node) and node.tag.lower() in EMPHASIS_TAGS  # type: ignore[attr-defined]


def is_annotation_candidate(node: HtmlElement | None) -> bool:
    """Check whether an emphasis element should be bracketed.

    Rejects None and non-elements, tags other than ``i``/``em``, elements
    already carrying the processed attribute, title-styled emphasis
    (``EXCLUDED_CLASS``) and elements with no non-whitespace text.
    Punctuation-only text such as ``(11)`` still qualifies.
    """
    if node is None or not is_emphasis(node):
        return False
    if node.get(PROCESSED_ATTR) is not None:
        return False
    if EXCLUDED_CLASS in (node.get("class") or "").split():
        return False
    return bool(visible_text(node).strip())


def can_merge_nodes(nodes: Iterable[str | HtmlElement]) -> bool:
    """Check whether the content between two candidates is letter-free.

    Args:
        nodes: Sibling content between two emphasis elements: text runs as
            strings, elements as elements.

    Returns:
        True if no text run and no non-emphasis element contains a letter.
        Emphasis elements and comments are not inspected.
    """
    for node in nodes:
        if isinstance(node, str):
            if has_letters(node):
                return False
        elif is_element(node) and not is_emphasis(node):
            if has_letters(visible_text(node)):
                return False
    return True


def find_group(start: HtmlElement) -> list[HtmlElement]:
    """Collect start and every following candidate it can merge with.

    Walks forward through start's siblings. Each step gathers the content
    up to the next emphasis element; if that element is a fresh candidate
    and the gathered content is letter-free, it joins the group and the walk
    continues from it. An emphasis element that is not a candidate (already
    processed, excluded, empty) ends the group, as does running out of
    siblings.

    Returns:
        Group members in document order, always starting with ``start``.
    """
    group = [start]
    current = start

    while True:
        between: list[str | HtmlElement] = []
        next_candidate = None

        if current.tail:
            between.append(current.tail)
        sibling = current.getnext()
        while sibling is not None:
            if is_emphasis(sibling):
                if is_annotation_candidate(sibling):
                    next_candidate = sibling
                break
            if is_element(sibling):
                between.append(sibling)
            if sibling.tail:
                between.append(sibling.tail)
            sibling = sibling.getnext()

        if next_candidate is None or not can_merge_nodes(between):
            return group

        group.append(next_candidate)
        current = next_candidate
