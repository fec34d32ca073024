"""Full bracketing pipeline over a document tree.

Passes run in a fixed order, each completing before the next starts:

1. Bracket every group of fresh annotation candidates, marking each visited
   emphasis element processed (including skipped ones).
2. Normalise marker boundaries across the whole tree.
3. Fuse adjacent close/open marker pairs across containers.

Passes communicate only through the tree and its marker attributes. The
processed attribute is never removed, so a second run over an unchanged
tree changes nothing.
"""

from __future__ import annotations

import html as html_module
import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from lxml import html as lxml_html

from annotation_brackets.brackets.boundaries import normalize_bracket_boundaries
from annotation_brackets.brackets.grouping import find_group, is_annotation_candidate
from annotation_brackets.brackets.insertion import insert_brackets
from annotation_brackets.brackets.merging import merge_adjacent_brackets
from annotation_brackets.marker_constants import EMPHASIS_TAGS, PROCESSED_ATTR

if TYPE_CHECKING:
    from lxml.html import HtmlElement

logger = logging.getLogger(__name__)

# Unprocessed emphasis below the root; the union is returned in document order
_UNPROCESSED_EMPHASIS = " | ".join(
    f".//{tag}[not(@{PROCESSED_ATTR})]" for tag in EMPHASIS_TAGS
)

# Leading comments cover browser "saved from url=" headers
_FULL_DOCUMENT = re.compile(
    r"^\s*(?:<!--.*?-->\s*)*(?:<!doctype|<html)", re.IGNORECASE | re.DOTALL
)


@dataclass
class BracketReport:
    """What one pipeline run did to the tree."""

    visited: int = 0
    skipped: int = 0
    groups: int = 0
    trailing_moved: int = 0
    leading_moved: int = 0
    fused: int = 0

    @property
    def changed(self) -> bool:
        return bool(
            self.groups or self.trailing_moved or self.leading_moved or self.fused
        )


def process_annotations(root: HtmlElement) -> BracketReport:
    """Run all passes over the tree below root.

    Args:
        root: Any element; only its descendants are considered, since
            markers are inserted as siblings of the bracketed elements.

    Returns:
        Counts for this run. A repeat run on an unchanged tree reports
        ``visited == 0`` and ``changed is False``.
    """
    report = BracketReport()

    for element in root.xpath(_UNPROCESSED_EMPHASIS):
        if element.get(PROCESSED_ATTR) is not None:
            # joined a group earlier in this run
            continue
        if not is_annotation_candidate(element):
            element.set(PROCESSED_ATTR, "true")
            report.visited += 1
            report.skipped += 1
            continue
        group = find_group(element)
        if insert_brackets(group):
            report.visited += len(group)
            report.groups += 1

    boundaries = normalize_bracket_boundaries(root)
    report.trailing_moved = boundaries.trailing
    report.leading_moved = boundaries.leading

    report.fused = merge_adjacent_brackets(root)

    if report.visited:
        logger.info(
            "Bracket pass: %d emphasis visited, %d group(s), %d fused, "
            "%d trailing / %d leading moved",
            report.visited,
            report.groups,
            report.fused,
            report.trailing_moved,
            report.leading_moved,
        )
    return report


def _fragment_inner_html(container: HtmlElement) -> str:
    """Serialise the children of a synthetic fragment wrapper."""
    parts = [html_module.escape(container.text or "", quote=False)]
    parts.extend(
        lxml_html.tostring(child, encoding="unicode") for child in container
    )
    return "".join(parts)


def bracket_html(html_content: str) -> tuple[str, BracketReport]:
    """Bracket annotations in an HTML string.

    Full documents (doctype or ``<html>``, possibly after comments) are
    processed as such; anything else is treated as a fragment, so a bare
    ``<i>note</i>`` is bracketed too. A leading byte-order mark is dropped.

    Args:
        html_content: HTML document or fragment.

    Returns:
        ``(html, report)``. Blank input is returned unchanged with an empty
        report.
    """
    if not html_content or not html_content.strip():
        return html_content, BracketReport()

    html_content = html_content.removeprefix("\ufeff")

    if _FULL_DOCUMENT.match(html_content):
        tree = lxml_html.document_fromstring(html_content)
        report = process_annotations(tree)
        return lxml_html.tostring(tree.getroottree(), encoding="unicode"), report

    container = lxml_html.fragment_fromstring(html_content, create_parent="div")
    report = process_annotations(container)
    return _fragment_inner_html(container), report
