"""Text-node view over lxml element trees.

lxml stores text on elements rather than in separate nodes: ``el.text`` is
the run before the first child and ``el.tail`` the run after ``el`` inside
its parent. The bracket passes reason in terms of DOM-style text nodes, so
this module addresses each run as a ``TextSlot`` and provides the sibling
insert/remove primitives that keep tails attached to the right neighbour.

A slot whose value is ``None`` does not exist. A slot emptied to ``""``
still exists in memory, but serialisation drops it, so passes that look
for the nearest text run walk past empty runs rather than stopping at them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from collections.abc import Iterator

    from lxml.html import HtmlElement


@dataclass(frozen=True)
class TextSlot:
    """One text run, addressed by its owning element and lxml attribute."""

    element: HtmlElement
    attr: Literal["text", "tail"]

    @property
    def value(self) -> str | None:
        return getattr(self.element, self.attr)

    def set(self, value: str) -> None:
        setattr(self.element, self.attr, value)

    def append(self, value: str) -> None:
        setattr(self.element, self.attr, (self.value or "") + value)


def is_element(node: object) -> bool:
    """Return True for element nodes; False for comments, PIs and None.

    lxml gives comments and processing instructions a callable ``tag``.
    """
    return isinstance(getattr(node, "tag", None), str)


def iter_text_slots(element: HtmlElement) -> Iterator[TextSlot]:
    """Yield the text slots inside element in document order.

    The element's own tail is outside it and is not yielded. Comment text is
    not visible content; comment tails are.
    """
    if element.text is not None:
        yield TextSlot(element, "text")
    for child in element:
        if is_element(child):
            yield from iter_text_slots(child)
        if child.tail is not None:
            yield TextSlot(child, "tail")


def slot_before(node: HtmlElement) -> TextSlot:
    """Return the slot holding the text directly before node.

    The slot may not exist yet (value ``None``); appending creates it.
    """
    prev = node.getprevious()
    if prev is not None:
        return TextSlot(prev, "tail")
    return TextSlot(node.getparent(), "text")


def preceding_runs(node: HtmlElement) -> Iterator[TextSlot]:
    """Yield the text runs before node, nearest first.

    Starts with the text immediately before node, then walks backwards
    through the runs inside the element directly before it. Never leaves
    that element: the walk stops at its start.
    """
    prev = node.getprevious()
    if prev is None:
        parent = node.getparent()
        if parent is not None and parent.text is not None:
            yield TextSlot(parent, "text")
        return
    if prev.tail is not None:
        yield TextSlot(prev, "tail")
    if is_element(prev):
        yield from reversed(list(iter_text_slots(prev)))


def following_runs(node: HtmlElement) -> Iterator[TextSlot]:
    """Yield the text runs after node, nearest first.

    node's tail, then the runs inside the element directly after it.
    """
    if node.tail is not None:
        yield TextSlot(node, "tail")
    nxt = node.getnext()
    if nxt is not None and is_element(nxt):
        yield from iter_text_slots(nxt)


def preceding_text(node: HtmlElement) -> TextSlot | None:
    """Find the nearest text run before node.

    Either the text immediately before node, or, when an element sits
    directly before it, the last text run inside that element.
    """
    return next(preceding_runs(node), None)


def following_text(node: HtmlElement) -> TextSlot | None:
    """Find the nearest text run after node.

    Either node's tail, or, when an element follows directly, the first
    text run inside that element.
    """
    return next(following_runs(node), None)


def insert_before(ref: HtmlElement, new: HtmlElement) -> None:
    """Insert new as the sibling directly before ref."""
    ref.addprevious(new)


def insert_after(ref: HtmlElement, new: HtmlElement) -> None:
    """Insert new as the sibling directly after ref.

    lxml's ``addnext`` places the new node after ref's tail, so the tail is
    handed over to new first: the text that followed ref follows new.
    """
    tail = ref.tail
    ref.tail = None
    ref.addnext(new)
    new.tail = tail


def remove_keeping_tail(node: HtmlElement) -> None:
    """Remove node from its parent, re-homing its tail on the previous slot."""
    parent = node.getparent()
    if parent is None:
        return
    if node.tail:
        slot_before(node).append(node.tail)
    parent.remove(node)


def visible_text(element: HtmlElement) -> str:
    """Concatenate the text runs inside element, excluding its tail."""
    return "".join(slot.value or "" for slot in iter_text_slots(element))
