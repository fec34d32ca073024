"""Bracketing of emphasised translator insertions in HTML trees."""

from annotation_brackets.brackets.boundaries import (
    BoundaryCounts,
    normalize_bracket_boundaries,
)
from annotation_brackets.brackets.classifier import (
    has_letters,
    is_blank_or_terminal_punctuation,
    split_leading,
    split_trailing,
)
from annotation_brackets.brackets.grouping import (
    can_merge_nodes,
    find_group,
    is_annotation_candidate,
)
from annotation_brackets.brackets.insertion import create_marker, insert_brackets
from annotation_brackets.brackets.merging import merge_adjacent_brackets
from annotation_brackets.brackets.pipeline import (
    BracketReport,
    bracket_html,
    process_annotations,
)

__all__ = [
    "BoundaryCounts",
    "BracketReport",
    "bracket_html",
    "can_merge_nodes",
    "create_marker",
    "find_group",
    "has_letters",
    "insert_brackets",
    "is_annotation_candidate",
    "is_blank_or_terminal_punctuation",
    "merge_adjacent_brackets",
    "normalize_bracket_boundaries",
    "process_annotations",
    "split_leading",
    "split_trailing",
]
