"""HTML fragment to lightweight Markdown-style text conversion."""

from __future__ import annotations

import html as html_entities
import logging
import re

logger = logging.getLogger(__name__)

_FLAGS = re.IGNORECASE | re.DOTALL

# Block constructs. These match literal tag boundaries, so they must run
# before any inline rewrite changes the text around them.
BLOCK_PASSES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"<p(?:\s[^>]*)?>(.*?)</p>", _FLAGS), r"\n\1\n"),
    (re.compile(r"</?dl(?:\s[^>]*)?>", _FLAGS), "\n"),
    (re.compile(r"<dt(?:\s[^>]*)?>(.*?)</dt>", _FLAGS), r"* **\1**\n"),
    (re.compile(r"<dd(?:\s[^>]*)?>(.*?)</dd>", _FLAGS), r"  \1\n"),
    (re.compile(r"</?ul(?:\s[^>]*)?>", _FLAGS), "\n"),
    (re.compile(r"<li(?:\s[^>]*)?>(.*?)</li>", _FLAGS), r"* \1\n"),
]

INLINE_PASSES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"<a\s[^>]*?href=\"(.*?)\"[^>]*>(.*?)</a>", _FLAGS), r"[\2](\1)"),
    (re.compile(r"<(?:strong|b)(?:\s[^>]*)?>(.*?)</(?:strong|b)>", _FLAGS), r"**\1**"),
    (re.compile(r"<(?:em|i)(?:\s[^>]*)?>(.*?)</(?:em|i)>", _FLAGS), r"*\1*"),
    (re.compile(r"<sup(?:\s[^>]*)?>\*</sup>", _FLAGS), "*"),
    (re.compile(r"<sup(?:\s[^>]*)?>(.*?)</sup>", _FLAGS), r"<sup>\1</sup>"),
]

# Two trailing spaces before a newline is a Markdown hard break
LINE_BREAK_PASS: tuple[re.Pattern[str], str] = (re.compile(r"<br\s*/?>", re.IGNORECASE), "  \n")

_BLANK_LINE = re.compile(r"^[ \t\r\f\v]+$", re.MULTILINE)
_BLANK_RUN = re.compile(r"\n{3,}")


def cleanup(text: str) -> str:
    """
    Normalise blank lines in converted text.

    Whitespace-only lines are emptied, runs of blank lines collapse to a
    single blank line and the result is trimmed. Idempotent.
    """
    text = _BLANK_LINE.sub("", text)
    text = _BLANK_RUN.sub("\n\n", text)
    return text.strip()


class HtmlToText:
    """
    Converts a rich-text HTML fragment into Markdown-flavoured text.

    This is a fixed sequence of regex rewrites, not an HTML parser: it
    targets the small set of constructs the site uses in author comments
    and licensing blocks.

    Example:
        converter = HtmlToText()
        text = converter.convert('<p>Made with <a href="https://x.io">X</a></p>')
        # 'Made with [X](https://x.io)'
    """

    def __init__(self, decode_entities: bool = True) -> None:
        """
        Initialize the converter.

        Args:
            decode_entities: Decode HTML entities (``&amp;`` etc.) before cleanup
        """
        self._decode_entities = decode_entities

    def convert(self, html: str) -> str:
        """
        Convert an HTML fragment to text.

        Args:
            html: HTML fragment string

        Returns:
            Converted text, or an empty string for empty input
        """
        if not html:
            return ""

        text = html.replace("\r\n", "\n")

        for pattern, replacement in BLOCK_PASSES:
            text = pattern.sub(replacement, text)
        for pattern, replacement in INLINE_PASSES:
            text = pattern.sub(replacement, text)

        pattern, replacement = LINE_BREAK_PASS
        text = pattern.sub(replacement, text)

        if self._decode_entities:
            text = html_entities.unescape(text)

        return cleanup(text)
