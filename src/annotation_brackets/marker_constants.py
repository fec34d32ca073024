"""Reserved identifiers for bracket markers.

These attribute and class names are the only contract surface external
consumers (stylesheets, scrapers, tests) may rely on when selecting
bracket markers or processed emphasis elements.

Used by brackets/ (predicate, inserter, normaliser, merger) and observer.py.
"""

from __future__ import annotations

# Set on every emphasis element the pipeline has visited. Never removed.
PROCESSED_ATTR = "data-bracket-processed"

# Exactly one of these is set on each inserted marker element
BRACKET_OPEN = "data-bracket-open"
BRACKET_CLOSE = "data-bracket-close"

# Emphasis carrying this class is title styling, not a translator insertion
EXCLUDED_CLASS = "MuiTypography-titleArabic"

EMPHASIS_TAGS = ("i", "em")

MARKER_TAG = "span"
OPEN_TEXT = "["
CLOSE_TEXT = "]"
