"""Daily digest Markdown → WeChat article HTML and cover card."""

from .parser import parse_cover_data, parse_digest_markdown
from .publisher import (
    convert_markdown_to_wechat_html,
    generate_cover_html,
    render_cover_html,
    render_wechat_html,
    screenshot_cover,
)

__all__ = [
    "parse_digest_markdown",
    "parse_cover_data",
    "render_wechat_html",
    "render_cover_html",
    "convert_markdown_to_wechat_html",
    "generate_cover_html",
    "screenshot_cover",
]
