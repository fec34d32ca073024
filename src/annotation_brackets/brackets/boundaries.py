"""Boundary normalisation around inserted bracket markers.

After bracketing, sentence punctuation and whitespace that ended the
emphasised text sit inside the brackets (``[really?]``). This pass moves:

- trailing whitespace and ``.``/``!``/``?`` from the text before each close
  marker to just after it: ``[really]?``
- leading whitespace from the text after each open marker to just before
  it: `` [text]`` rather than ``[ text]``

Markers are re-derived from the tree on every call, so re-running the pass
on an already-normalised tree changes nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from annotation_brackets.brackets.classifier import split_leading, split_trailing
from annotation_brackets.brackets.dom import (
    following_runs,
    preceding_runs,
    slot_before,
)
from annotation_brackets.marker_constants import BRACKET_CLOSE, BRACKET_OPEN

if TYPE_CHECKING:
    from lxml.html import HtmlElement

logger = logging.getLogger(__name__)


@dataclass
class BoundaryCounts:
    """Number of text runs relocated across markers in one pass."""

    trailing: int = 0
    leading: int = 0


def _move_trailing_out(close: HtmlElement) -> bool:
    """Move terminal punctuation/whitespace before close to just after it.

    A run left empty by the move would vanish on serialisation, so the walk
    carries on into the run before it until some text stays behind.
    """
    moved: list[str] = []
    for source in preceding_runs(close):
        body, trailing = split_trailing(source.value or "")
        if trailing:
            source.set(body)
            moved.append(trailing)
        if body:
            break
    if not moved:
        return False
    close.tail = "".join(reversed(moved)) + (close.tail or "")
    return True


def _move_leading_out(open_: HtmlElement) -> bool:
    """Move whitespace after open to just before it."""
    moved: list[str] = []
    for source in following_runs(open_):
        leading, body = split_leading(source.value or "")
        if leading:
            source.set(body)
            moved.append(leading)
        if body:
            break
    if not moved:
        return False
    slot_before(open_).append("".join(moved))
    return True


def normalize_bracket_boundaries(root: HtmlElement) -> BoundaryCounts:
    """Relocate boundary text for every marker under root.

    Close and open markers touch disjoint text runs, so the two sweeps are
    independent of each other.

    Returns:
        How many trailing and leading runs were moved.
    """
    counts = BoundaryCounts()

    for close in root.xpath(f".//*[@{BRACKET_CLOSE}]"):
        if _move_trailing_out(close):
            counts.trailing += 1

    for open_ in root.xpath(f".//*[@{BRACKET_OPEN}]"):
        if _move_leading_out(open_):
            counts.leading += 1

    if counts.trailing or counts.leading:
        logger.debug(
            "Moved %d trailing and %d leading run(s) across markers",
            counts.trailing,
            counts.leading,
        )
    return counts
