"""Comment body rendering interface."""


class BodyRenderer:
    """Turns a comment's markdown into sanitized HTML."""

    def render(self, markdown: str) -> str:
        """Render and sanitize a comment body.

        Args:
            markdown: Raw comment body

        Returns:
            HTML that is safe to embed in a page
        """
        raise NotImplementedError
