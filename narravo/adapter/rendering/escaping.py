"""Plain-text comment renderer.

Escapes everything and keeps only paragraph and line breaks, so the output
is safe without a sanitizer. Swap in a markdown renderer through DI when
rich formatting is wanted.
"""

import html
import re

from narravo.domain.service.rendering import BodyRenderer

_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")


class EscapingBodyRenderer(BodyRenderer):
    """Render comment bodies as escaped paragraphs."""

    def render(self, markdown: str) -> str:
        text = markdown.replace("\r\n", "\n").strip()
        if not text:
            return ""
        paragraphs = [p.strip() for p in _PARAGRAPH_BREAK.split(text) if p.strip()]
        return "".join(
            "<p>" + "<br>".join(html.escape(line) for line in p.split("\n")) + "</p>"
            for p in paragraphs
        )
