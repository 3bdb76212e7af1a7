"""Protocol definitions for rich-text conversion."""

from typing import Protocol


class MarkupConverter(Protocol):
    """
    Protocol for turning an embedded HTML fragment into plain text.

    Implementations receive the inner HTML of a rich-text container
    (author comments, licensing terms) and return a lightly marked-up
    text rendering.
    """

    def convert(self, html: str) -> str:
        """
        Convert an HTML fragment to text.

        Args:
            html: HTML fragment string (may be empty)

        Returns:
            Text rendering, trimmed, with at most one blank line in a row
        """
        ...
