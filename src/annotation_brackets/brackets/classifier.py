"""Text classification for annotation boundaries.

Pure predicates over strings; nothing here touches the document tree.

"Letters" are the single test for meaningful content: a run with no letter
in any script (only whitespace, digits or punctuation) is blank as far as
grouping and fusion are concerned.

Only sentence terminators (``.``, ``!``, ``?``) and whitespace move outward
across a closing bracket. Commas and other clause punctuation belong to the
annotation and stay inside.
"""

# Pattern: Functional Core

from __future__ import annotations

TERMINAL_PUNCTUATION = frozenset(".!?")


def _is_trailing_char(ch: str) -> bool:
    # str.isspace() includes U+00A0
    return ch.isspace() or ch in TERMINAL_PUNCTUATION


def has_letters(text: str) -> bool:
    """Return True if text contains at least one Unicode letter.

    Digits are not letters: ``has_letters("123")`` is False.
    """
    return any(ch.isalpha() for ch in text)


def is_blank_or_terminal_punctuation(text: str) -> bool:
    """Return True if text is only whitespace and ``.``/``!``/``?``.

    The empty string qualifies. A comma does not.
    """
    return all(_is_trailing_char(ch) for ch in text)


def split_trailing(text: str) -> tuple[str, str]:
    """Split off the longest suffix of whitespace and terminal punctuation.

    Args:
        text: Text immediately preceding a closing bracket.

    Returns:
        ``(body, trailing)`` where ``body + trailing == text``. ``trailing``
        is empty when the text ends in anything else (a letter, a comma).
    """
    end = len(text)
    while end and _is_trailing_char(text[end - 1]):
        end -= 1
    return text[:end], text[end:]


def split_leading(text: str) -> tuple[str, str]:
    """Split off the longest whitespace prefix.

    Leading punctuation is never split off.

    Returns:
        ``(leading, body)`` where ``leading + body == text``.
    """
    body = text.lstrip()
    return text[: len(text) - len(body)], body
