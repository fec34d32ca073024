"""Bracket marker creation and insertion around a group."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Literal

from lxml import html as lxml_html

from annotation_brackets.brackets.dom import insert_after, insert_before, is_element
from annotation_brackets.marker_constants import (
    BRACKET_CLOSE,
    BRACKET_OPEN,
    CLOSE_TEXT,
    MARKER_TAG,
    OPEN_TEXT,
    PROCESSED_ATTR,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from lxml.html import HtmlElement

logger = logging.getLogger(__name__)

MarkerKind = Literal["open", "close"]


def create_marker(kind: MarkerKind) -> HtmlElement:
    """Create a ``<span>`` holding ``[`` or ``]`` with its marker attribute."""
    marker = lxml_html.Element(MARKER_TAG)
    if kind == "open":
        marker.set(BRACKET_OPEN, "true")
        marker.text = OPEN_TEXT
    else:
        marker.set(BRACKET_CLOSE, "true")
        marker.text = CLOSE_TEXT
    return marker


def is_open_marker(node: object) -> bool:
    return is_element(node) and node.get(BRACKET_OPEN) is not None  # type: ignore[attr-defined]


def is_close_marker(node: object) -> bool:
    return is_element(node) and node.get(BRACKET_CLOSE) is not None  # type: ignore[attr-defined]


def is_marker(node: object) -> bool:
    return is_open_marker(node) or is_close_marker(node)


def insert_brackets(group: Sequence[HtmlElement]) -> bool:
    """Mark every member processed and wrap the group in one bracket pair.

    The open marker goes directly before the first member and the close
    marker directly after the last member, ahead of any text that followed
    it. No existing text is altered.

    Returns:
        False for an empty group (nothing is touched), True otherwise.
    """
    if not group:
        return False

    for element in group:
        element.set(PROCESSED_ATTR, "true")

    insert_before(group[0], create_marker("open"))
    insert_after(group[-1], create_marker("close"))

    logger.debug(
        "Bracketed group of %d element(s) under <%s>",
        len(group),
        group[0].getparent().tag,
    )
    return True
