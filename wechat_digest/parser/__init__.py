from .cover_parser import parse_cover_data
from .digest_parser import DigestParser, Section, parse_digest_markdown
from .inline import (
    escape_html,
    inline_markdown_to_html,
    split_keywords,
    strip_inline_markdown,
    strip_links,
)

__all__ = [
    "DigestParser",
    "Section",
    "parse_digest_markdown",
    "parse_cover_data",
    "escape_html",
    "inline_markdown_to_html",
    "split_keywords",
    "strip_inline_markdown",
    "strip_links",
]
