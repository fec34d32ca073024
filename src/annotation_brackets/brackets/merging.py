"""Cross-container fusion of adjacent bracket pairs.

Grouping only joins emphasis elements that share a parent. When one
annotation is split over two containers, e.g.::

    <div><i>one</i></div> <div><i>two</i></div>

each half gets its own pair, ``[one] [two]``. This pass walks the whole tree
in document order and, wherever a close marker is followed by an open marker
with only letter-free text between them, removes both markers so the reader
sees ``[one two]``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from annotation_brackets.brackets.classifier import has_letters
from annotation_brackets.brackets.dom import is_element, remove_keeping_tail
from annotation_brackets.brackets.insertion import (
    is_close_marker,
    is_marker,
    is_open_marker,
)

if TYPE_CHECKING:
    from lxml.html import HtmlElement

logger = logging.getLogger(__name__)


def _collect_segments(root: HtmlElement) -> list[tuple[HtmlElement, str]]:
    """Walk root in document order, pairing each marker with the text after it.

    The text paired with a marker runs up to the next marker and excludes
    the markers' own ``[``/``]``. Text before the first marker is dropped.
    """
    segments: list[tuple[HtmlElement, list[str]]] = []

    def add_text(value: str | None) -> None:
        if value and segments:
            segments[-1][1].append(value)

    def walk(element: HtmlElement) -> None:
        if is_marker(element):
            segments.append((element, []))
            return
        add_text(element.text)
        for child in element:
            if is_element(child):
                walk(child)
            add_text(child.tail)

    walk(root)
    return [(marker, "".join(parts)) for marker, parts in segments]


def merge_adjacent_brackets(root: HtmlElement) -> int:
    """Fuse close/open marker pairs separated only by letter-free text.

    Returns:
        Number of fused pairs (two markers removed per pair).
    """
    segments = _collect_segments(root)
    fused = 0

    i = 0
    while i < len(segments) - 1:
        marker, between = segments[i]
        next_marker = segments[i + 1][0]
        if (
            is_close_marker(marker)
            and is_open_marker(next_marker)
            and not has_letters(between)
        ):
            remove_keeping_tail(marker)
            remove_keeping_tail(next_marker)
            fused += 1
            logger.debug("Fused bracket pair across %r", between)
            # the open marker is consumed; resume after it
            i += 2
        else:
            i += 1

    return fused
