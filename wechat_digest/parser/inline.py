"""Inline Markdown helpers shared by the digest and cover parsers/renderers."""

from __future__ import annotations

import re

_LINK_RE = re.compile(r'\[([^\]]+)\]\(([^)]+)\)')
_BOLD_RE = re.compile(r'\*\*([^*]+)\*\*')
_ITALIC_RE = re.compile(r'\*([^*]+)\*')
_CODE_RE = re.compile(r'`([^`]+)`')
_KEYWORD_SEP_RE = re.compile(r'[,，]\s*')

CODE_STYLE = (
    "background:#f7f8fa;padding:2px 6px;border-radius:3px;"
    "font-size:14px;color:#ff6b35;"
)


def escape_html(text: str, quote: bool = True) -> str:
    """Escape HTML special characters (& < > and optionally ")."""
    text = text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
    if quote:
        text = text.replace('"', "&quot;")
    return text


def strip_links(text: str) -> str:
    """[text](url) → text."""
    return _LINK_RE.sub(r'\1', text)


def strip_inline_markdown(text: str) -> str:
    """Remove **bold**, *italic* and `code` markers, keeping the inner text."""
    text = _BOLD_RE.sub(r'\1', text)
    text = _ITALIC_RE.sub(r'\1', text)
    return _CODE_RE.sub(r'\1', text)


def inline_markdown_to_html(text: str) -> str:
    """Convert inline markdown to HTML: links dropped, bold/italic/code tagged."""
    text = strip_links(text)
    text = _BOLD_RE.sub(r'<strong>\1</strong>', text)
    text = _ITALIC_RE.sub(r'<em>\1</em>', text)
    return _CODE_RE.sub(rf'<code style="{CODE_STYLE}">\1</code>', text)


def split_keywords(text: str) -> list[str]:
    """Split a keyword line on ASCII or fullwidth commas."""
    return [t.strip() for t in _KEYWORD_SEP_RE.split(text) if t.strip()]
