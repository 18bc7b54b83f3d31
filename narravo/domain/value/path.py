"""Materialized comment paths.

A path is a dot-separated list of fixed-width sibling sequence numbers,
e.g. ``0001.0003`` is the third reply to the first top-level comment.
Zero padding keeps lexicographic order equal to creation order for up to
9999 siblings per parent.
"""

import re

PATH_SEGMENT_WIDTH = 4
PATH_SEPARATOR = "."
MAX_SIBLING_SEQUENCE = 10**PATH_SEGMENT_WIDTH - 1

_PATH_RE = re.compile(r"^\d{4}(\.\d{4})*$")


def format_segment(sequence: int) -> str:
    """Zero-pad a sibling sequence number to a path segment.

    Raises:
        ValueError: If the sequence does not fit in a segment
    """
    if sequence < 1 or sequence > MAX_SIBLING_SEQUENCE:
        raise ValueError(f"Sibling sequence out of range: {sequence}")
    return str(sequence).zfill(PATH_SEGMENT_WIDTH)


def child_path(parent: str | None, sequence: int) -> str:
    """Build the path of the ``sequence``-th child of ``parent``."""
    segment = format_segment(sequence)
    if not parent:
        return segment
    return f"{parent}{PATH_SEPARATOR}{segment}"


def parent_path(path: str) -> str | None:
    """Return the path with its last segment removed (None at top level)."""
    head, sep, _ = path.rpartition(PATH_SEPARATOR)
    return head if sep else None


def path_depth(path: str) -> int:
    """Number of segments minus one."""
    return path.count(PATH_SEPARATOR)


def descendant_prefix(path: str) -> str:
    """Prefix shared by every descendant of ``path``."""
    return f"{path}{PATH_SEPARATOR}"


def is_valid_path(path: str) -> bool:
    return bool(_PATH_RE.match(path))
