"""Debounced re-bracketing of a live document tree.

The host owning the tree reports batches of added nodes through
``BracketObserver.children_added``. If any added node is, or contains, an
emphasis element, a pipeline run is scheduled after a short coalescing
delay. Further signals while a run is pending cancel it and schedule a new
one, so bursts of mutation produce a single run once they stop.

The pipeline itself is idempotent, so a run triggered by content that has
already been handled is a no-op.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Literal

from annotation_brackets.brackets.dom import is_element
from annotation_brackets.brackets.pipeline import BracketReport, process_annotations
from annotation_brackets.marker_constants import EMPHASIS_TAGS

if TYPE_CHECKING:
    from collections.abc import Iterable

    from lxml.html import HtmlElement

logger = logging.getLogger(__name__)

ObserverState = Literal["idle", "scheduled"]


def contains_emphasis(node: object) -> bool:
    """Return True if node is an emphasis element or has one below it."""
    if not is_element(node):
        return False
    return next(node.iter(*EMPHASIS_TAGS), None) is not None  # type: ignore[attr-defined]


class BracketObserver:
    """Runs the bracket pipeline over a tree initially and after changes.

    Attributes:
        debounce_seconds: Coalescing delay (class default, override per
            instance or via ``OBSERVER__DEBOUNCE_SECONDS``).
        runs: Number of completed pipeline runs.
        last_report: Report of the most recent run, or None before the first.
        _pending: The scheduled run, if any.
    """

    debounce_seconds: float = 0.1

    def __init__(
        self, root: HtmlElement, *, debounce_seconds: float | None = None
    ) -> None:
        self._root = root
        if debounce_seconds is not None:
            self.debounce_seconds = debounce_seconds
        self._pending: asyncio.Task[None] | None = None
        self.runs = 0
        self.last_report: BracketReport | None = None

    @classmethod
    def from_settings(cls, root: HtmlElement) -> BracketObserver:
        """Build an observer using the configured debounce delay."""
        from annotation_brackets.config import get_settings

        return cls(root, debounce_seconds=get_settings().observer.debounce_seconds)

    @property
    def state(self) -> ObserverState:
        if self._pending is not None and not self._pending.done():
            return "scheduled"
        return "idle"

    def start(self) -> BracketReport:
        """Run the pipeline once, unconditionally."""
        return self.run_now()

    def run_now(self) -> BracketReport:
        """Run the pipeline synchronously over the whole tree."""
        report = process_annotations(self._root)
        self.runs += 1
        self.last_report = report
        return report

    def children_added(self, nodes: Iterable[object]) -> bool:
        """Handle a host notification that nodes were added to the tree.

        Returns:
            True if a run was scheduled (or rescheduled).
        """
        if not any(contains_emphasis(node) for node in nodes):
            return False
        self.schedule()
        return True

    def schedule(self) -> None:
        """Schedule or reschedule a debounced run.

        Must be called from within a running event loop.
        """
        self._cancel_pending()
        self._pending = asyncio.create_task(self._debounced_run())

    def _cancel_pending(self) -> None:
        """Cancel a pending debounced run if exists."""
        task = self._pending
        self._pending = None
        if task and not task.done():
            task.cancel()

    async def _debounced_run(self) -> None:
        """Wait for the debounce period then run the pipeline."""
        try:
            await asyncio.sleep(self.debounce_seconds)
        except asyncio.CancelledError:
            return  # superseded by a newer signal

        self._pending = None
        try:
            self.run_now()
        except Exception:
            logger.exception("Bracket pipeline run failed")

    def flush(self) -> BracketReport:
        """Run immediately, dropping any pending debounced run."""
        self._cancel_pending()
        return self.run_now()

    def stop(self) -> None:
        """Cancel any pending run without running it."""
        self._cancel_pending()
