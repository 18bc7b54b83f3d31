"""Comment body renderers."""

from .escaping import EscapingBodyRenderer

__all__ = ["EscapingBodyRenderer"]
