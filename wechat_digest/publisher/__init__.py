from .cover_generator import generate_cover_html, render_cover_html
from .screenshot import CoverScreenshotter, screenshot_cover
from .wechat_html import convert_markdown_to_wechat_html, render_wechat_html

__all__ = [
    "render_wechat_html",
    "convert_markdown_to_wechat_html",
    "render_cover_html",
    "generate_cover_html",
    "CoverScreenshotter",
    "screenshot_cover",
]
