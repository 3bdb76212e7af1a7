"""Rich-text conversion for ngpull (HTML fragments to text)."""

from .markup import HtmlToText, cleanup
from .protocols import MarkupConverter

__all__ = [
    # Protocols
    "MarkupConverter",
    # Implementations
    "HtmlToText",
    "cleanup",
]
