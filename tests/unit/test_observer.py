"""Unit tests for the debounced bracket observer."""

from __future__ import annotations

import asyncio
import logging
from unittest.mock import MagicMock, patch

import pytest
from lxml import etree
from lxml import html as lxml_html

from annotation_brackets.config import get_settings
from annotation_brackets.observer import BracketObserver, contains_emphasis

DEBOUNCE = 0.05


def _tree(html: str) -> lxml_html.HtmlElement:
    return lxml_html.fragment_fromstring(html, create_parent="div")


class TestContainsEmphasis:
    @pytest.mark.parametrize(
        ("html", "expected"),
        [
            ("<i>x</i>", True),
            ("<em>x</em>", True),
            ("<p>a <i>x</i></p>", True),
            ("<p>plain</p>", False),
            ("<span><b>bold</b></span>", False),
        ],
    )
    def test_elements(self, html: str, expected: bool) -> None:
        assert contains_emphasis(lxml_html.fragment_fromstring(html)) is expected

    def test_non_elements(self) -> None:
        assert not contains_emphasis(None)
        assert not contains_emphasis("<i>text</i>")
        assert not contains_emphasis(etree.Comment("<i>"))


class TestBracketObserver:
    """Scheduling behaviour of BracketObserver."""

    def test_start_runs_once(self) -> None:
        """start() brackets existing content immediately."""
        root = _tree("<p><i>one</i></p>")
        observer = BracketObserver(root, debounce_seconds=DEBOUNCE)

        report = observer.start()

        assert observer.runs == 1
        assert observer.last_report is report
        assert report.groups == 1
        assert root.text_content() == "[one]"
        assert observer.state == "idle"

    @pytest.mark.asyncio
    async def test_signal_without_emphasis_is_ignored(self) -> None:
        observer = BracketObserver(_tree("<p>x</p>"), debounce_seconds=DEBOUNCE)

        added = lxml_html.fragment_fromstring("<b>y</b>")

        scheduled = observer.children_added([added])

        assert scheduled is False
        assert observer.state == "idle"

    @pytest.mark.asyncio
    async def test_emphasis_signal_runs_after_delay(self) -> None:
        """Added emphasis is bracketed once the debounce period passes."""
        root = _tree("<p>start</p>")
        observer = BracketObserver(root, debounce_seconds=DEBOUNCE)
        observer.start()

        added = lxml_html.fragment_fromstring("<p><i>late</i></p>")
        root.append(added)
        assert observer.children_added([added]) is True
        assert observer.state == "scheduled"
        assert observer.runs == 1

        await asyncio.sleep(DEBOUNCE + 0.1)

        assert observer.state == "idle"
        assert observer.runs == 2
        assert observer.last_report is not None
        assert observer.last_report.groups == 1
        assert "[late]" in root.text_content()

    @pytest.mark.asyncio
    async def test_burst_coalesces_into_one_run(self) -> None:
        """Signals inside the debounce window reset the timer."""
        root = _tree("<p>start</p>")
        observer = BracketObserver(root, debounce_seconds=DEBOUNCE)

        for text in ("a", "b", "c"):
            added = lxml_html.fragment_fromstring(f"<p><i>{text}</i></p>")
            root.append(added)
            observer.children_added([added])
            await asyncio.sleep(DEBOUNCE / 4)

        assert observer.runs == 0

        await asyncio.sleep(DEBOUNCE + 0.1)

        assert observer.runs == 1

    @pytest.mark.asyncio
    async def test_reschedule_cancels_prior_task(self) -> None:
        observer = BracketObserver(_tree("<p>x</p>"), debounce_seconds=DEBOUNCE)

        observer.schedule()
        first = observer._pending
        observer.schedule()
        second = observer._pending

        # Give the event loop a chance to process the cancellation
        await asyncio.sleep(0)

        assert first is not None
        assert first.done()
        assert second is not first
        assert not second.done()

        observer.stop()

    @pytest.mark.asyncio
    async def test_flush_runs_immediately(self) -> None:
        root = _tree("<p><i>now</i></p>")
        observer = BracketObserver(root, debounce_seconds=10)
        observer.schedule()

        report = observer.flush()

        assert report.groups == 1
        assert observer.runs == 1
        assert observer.state == "idle"

    @pytest.mark.asyncio
    async def test_stop_cancels_without_running(self) -> None:
        observer = BracketObserver(_tree("<p><i>x</i></p>"), debounce_seconds=DEBOUNCE)
        observer.schedule()

        observer.stop()
        await asyncio.sleep(DEBOUNCE + 0.1)

        assert observer.runs == 0
        assert observer.state == "idle"

    @pytest.mark.asyncio
    async def test_failed_run_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """A pipeline error in a scheduled run is logged, not raised."""
        observer = BracketObserver(_tree("<p>x</p>"), debounce_seconds=DEBOUNCE)

        with (
            caplog.at_level(logging.ERROR, logger="annotation_brackets.observer"),
            patch(
                "annotation_brackets.observer.process_annotations",
                MagicMock(side_effect=RuntimeError("boom")),
            ),
        ):
            observer.schedule()
            await asyncio.sleep(DEBOUNCE + 0.1)

        assert observer.runs == 0
        assert "Bracket pipeline run failed" in caplog.text
        assert observer.state == "idle"


class TestFromSettings:
    def test_uses_configured_debounce(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """OBSERVER__DEBOUNCE_SECONDS sets the delay."""
        monkeypatch.setenv("OBSERVER__DEBOUNCE_SECONDS", "0.5")
        get_settings.cache_clear()

        observer = BracketObserver.from_settings(_tree("<p>x</p>"))

        assert observer.debounce_seconds == 0.5

    def test_class_default(self) -> None:
        assert BracketObserver(_tree("<p>x</p>")).debounce_seconds == 0.1
