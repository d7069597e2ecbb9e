"""WeChat article publisher — renders the parsed digest as inline-styled HTML.

The WeChat editor strips <style> blocks and is picky about layout CSS, so:
- every style is an inline attribute
- no display:flex (tables instead), no box-sizing
- <section> for block wrappers
- margin/padding shorthands expanded
"""

from __future__ import annotations

import asyncio
import logging
import re
from pathlib import Path
from typing import Optional

from ..parser.digest_parser import parse_digest_markdown
from ..parser.inline import escape_html, split_keywords, strip_inline_markdown
from ..schemas import (
    ArticleConfig,
    CategorySection,
    Medal,
    ParsedDigest,
    StatsRow,
    TopArticle,
)

logger = logging.getLogger(__name__)

COLORS = {
    "primary": "#1a73e8",
    "primary_light": "#e8f0fe",
    "text": "#333333",
    "text_secondary": "#666666",
    "text_light": "#999999",
    "bg": "#ffffff",
    "bg_card": "#f7f8fa",
    "bg_quote": "#f0f6ff",
    "border": "#e5e5e5",
    "border_light": "#f0f0f0",
    "accent": "#ff6b35",
    "tag_other": "#757575",
}

# Category label substring → badge color
CATEGORY_COLORS = {
    "AI / ML": "#1a73e8",
    "安全": "#e53935",
    "工程": "#43a047",
    "工具 / 开源": "#fb8c00",
    "观点 / 杂谈": "#8e24aa",
    "其他": COLORS["tag_other"],
}

MEDAL_BORDER_COLORS = {
    Medal.GOLD: "#FFD700",
    Medal.SILVER: "#C0C0C0",
    Medal.BRONZE: "#CD7F32",
}

# A meta segment containing one of these is a category badge. Whole code
# points only: other emoji (🎨 设计) stay plain text.
_CATEGORY_BADGE_EMOJIS = (
    "\U0001f916",  # 🤖
    "\U0001f512",  # 🔒
    "\u2699",      # ⚙️
    "\U0001f6e0",  # 🛠
    "\U0001f4a1",  # 💡
    "\U0001f4dd",  # 📝
)

_TAG_BOLD_RE = re.compile(r'^\*\*(.+?)\*\*\((\d+)\)$')
_TAG_PLAIN_RE = re.compile(r'^(.+?)\((\d+)\)$')

FONT_STACK = (
    "-apple-system,BlinkMacSystemFont,'Segoe UI','Helvetica Neue',Arial,"
    "'PingFang SC','Hiragino Sans GB','Microsoft YaHei',sans-serif"
)

# Zeroed side margins, repeated on almost every block
_M0 = "margin-left:0;margin-right:0;"

HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="zh-CN">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{title}</title>
</head>
<body style="margin:0;padding:0;background-color:{bg};font-family:{font_stack};">
<section style="max-width:100%;margin-left:auto;margin-right:auto;padding-top:20px;padding-bottom:20px;padding-left:16px;padding-right:16px;color:{text};font-size:16px;line-height:1.8;">
{content}
</section>
</body>
</html>"""


def category_color(label: str) -> str:
    """Badge color for a category label, by substring match."""
    for key, color in CATEGORY_COLORS.items():
        if key in label:
            return color
    return COLORS["tag_other"]


def _section_heading(text: str) -> str:
    return (
        f'<h2 style="font-size:20px;font-weight:bold;color:{COLORS["text"]};'
        f'margin-top:28px;margin-bottom:16px;{_M0}padding-bottom:8px;'
        f'border-bottom:2px solid {COLORS["primary"]};">{text}</h2>\n'
    )


def _divider() -> str:
    return (
        f'<p style="border-top:1px dashed {COLORS["border"]};margin-top:24px;'
        f'margin-bottom:24px;{_M0}height:0;overflow:hidden;">&nbsp;</p>\n'
    )


def _keyword_chips(keywords: str, compact: bool = False) -> str:
    if compact:
        pad = "padding-top:1px;padding-bottom:1px;padding-left:6px;padding-right:6px;"
        shape = "border-radius:3px;margin-top:2px;margin-bottom:2px;margin-left:0;margin-right:3px;"
    else:
        pad = "padding-top:2px;padding-bottom:2px;padding-left:8px;padding-right:8px;"
        shape = "border-radius:4px;margin-top:2px;margin-bottom:2px;margin-left:0;margin-right:4px;"
    chips = "".join(
        f'<span style="display:inline-block;background-color:{COLORS["primary_light"]};'
        f'color:{COLORS["primary"]};font-size:12px;{pad}{shape}">{escape_html(tag)}</span>'
        for tag in split_keywords(keywords)
    )
    return f'<p style="margin-top:6px;margin-bottom:0;{_M0}">{chips}</p>\n'


def _render_meta(meta: str) -> str:
    """Right side of 'Title — source · time · 🤖 AI / ML' with category badges."""
    parts = meta.split(" — ")
    right = parts[1] if len(parts) > 1 else ""
    out = ""
    for part in (p.strip() for p in right.split(" · ")):
        if any(e in part for e in _CATEGORY_BADGE_EMOJIS):
            out += (
                f' <span style="display:inline-block;background-color:{category_color(part)};'
                f'color:white;font-size:12px;padding-top:2px;padding-bottom:2px;'
                f'padding-left:8px;padding-right:8px;border-radius:4px;margin-left:4px;">'
                f'{escape_html(part)}</span>'
            )
        else:
            out += (" · " if out else "") + f"<span>{escape_html(part)}</span>"
    return (
        f'<p style="font-size:13px;color:{COLORS["text_secondary"]};margin-top:0;'
        f'margin-bottom:10px;{_M0}">{out}</p>\n'
    )


def _render_top_article(art: TopArticle) -> str:
    border = MEDAL_BORDER_COLORS[art.medal]
    html = (
        f'<section style="background-color:{COLORS["bg_card"]};border-radius:8px;'
        f'border-left:4px solid {border};padding-top:16px;padding-bottom:16px;'
        f'padding-left:18px;padding-right:18px;margin-top:0;margin-bottom:16px;{_M0}">\n'
    )
    html += (
        f'<p style="font-size:18px;font-weight:bold;color:{COLORS["text"]};margin-top:0;'
        f'margin-bottom:8px;{_M0}">{art.medal.value} {escape_html(art.title_zh)}</p>\n'
    )
    if art.meta:
        html += _render_meta(art.meta)
    if art.summary:
        html += (
            f'<p style="font-size:15px;line-height:1.8;color:{COLORS["text"]};margin-top:0;'
            f'margin-bottom:8px;{_M0}">{escape_html(art.summary)}</p>\n'
        )
    if art.reason:
        html += (
            f'<section style="background-color:#fff8e1;border-radius:4px;padding-top:8px;'
            f'padding-bottom:8px;padding-left:12px;padding-right:12px;font-size:14px;'
            f'color:#e65100;margin-top:0;margin-bottom:8px;{_M0}">'
            f'💡 <strong>推荐理由：</strong>{escape_html(art.reason)}</section>\n'
        )
    if art.keywords:
        html += _keyword_chips(art.keywords)
    html += "</section>\n"
    return html


def _render_stats(stats: StatsRow) -> str:
    items = (
        ("扫描源", stats.sources),
        ("抓取文章", stats.articles),
        ("时间范围", stats.time_range),
        ("精选", strip_inline_markdown(stats.selected)),
    )
    html = _section_heading("📊 数据概览")
    html += (
        f'<table style="width:100%;border-collapse:collapse;background-color:{COLORS["bg_card"]};'
        f'border-radius:8px;margin-top:0;margin-bottom:16px;{_M0}"><tbody><tr>\n'
    )
    for label, value in items:
        html += (
            f'<td style="text-align:center;padding-top:16px;padding-bottom:16px;'
            f'padding-left:8px;padding-right:8px;width:25%;">'
            f'<p style="font-size:18px;font-weight:bold;color:{COLORS["primary"]};'
            f'margin-top:0;margin-bottom:4px;{_M0}">{escape_html(value)}</p>'
            f'<p style="font-size:12px;color:{COLORS["text_light"]};margin-top:0;'
            f'margin-bottom:0;{_M0}">{escape_html(label)}</p></td>\n'
        )
    html += "</tr></tbody></table>\n"
    return html


def _render_tag_cloud(tag_cloud: str) -> str:
    """**word**(n) tokens are emphasized, word(n) tokens plain, others dropped."""
    chips: list[str] = []
    for token in tag_cloud.split(" · "):
        token = token.strip()
        m = _TAG_BOLD_RE.match(token)
        if m:
            chips.append(
                f'<span style="display:inline-block;background-color:{COLORS["primary"]};'
                f'color:white;font-size:14px;font-weight:bold;padding-top:2px;padding-bottom:2px;'
                f'padding-left:10px;padding-right:10px;border-radius:12px;margin-top:3px;'
                f'margin-bottom:3px;margin-left:0;margin-right:6px;">'
                f'{escape_html(m.group(1))} {m.group(2)}</span>'
            )
            continue
        m = _TAG_PLAIN_RE.match(token)
        if m:
            chips.append(
                f'<span style="display:inline-block;background-color:{COLORS["primary_light"]};'
                f'color:{COLORS["primary"]};font-size:12px;padding-top:2px;padding-bottom:2px;'
                f'padding-left:8px;padding-right:8px;border-radius:12px;margin-top:3px;'
                f'margin-bottom:3px;margin-left:0;margin-right:6px;">'
                f'{escape_html(m.group(1))} {m.group(2)}</span>'
            )
    if not chips:
        return ""
    return (
        f'<p style="text-align:center;margin-top:0;margin-bottom:16px;{_M0}">'
        f'{"".join(chips)}</p>\n'
    )


def _render_category(cat: CategorySection) -> str:
    html = (
        f'<h2 style="font-size:20px;font-weight:bold;color:{COLORS["text"]};margin-top:24px;'
        f'margin-bottom:16px;{_M0}"><span style="display:inline-block;'
        f'background-color:{category_color(cat.label)};color:white;font-size:14px;'
        f'padding-top:2px;padding-bottom:2px;padding-left:10px;padding-right:10px;'
        f'border-radius:4px;margin-right:8px;vertical-align:middle;">'
        f'{escape_html(cat.emoji)} {escape_html(cat.label)}</span></h2>\n'
    )
    for art in cat.articles:
        html += (
            f'<section style="border-bottom:1px dashed {COLORS["border_light"]};'
            f'padding-top:12px;padding-bottom:12px;padding-left:0;padding-right:0;'
            f'margin-top:0;margin-bottom:4px;{_M0}">\n'
        )
        html += (
            f'<p style="font-size:16px;font-weight:bold;color:{COLORS["text"]};margin-top:0;'
            f'margin-bottom:6px;{_M0}"><span style="color:{COLORS["primary"]};margin-right:4px;">'
            f'{escape_html(art.index)}.</span> {escape_html(art.title_zh)}</p>\n'
        )
        if art.meta:
            html += (
                f'<p style="font-size:13px;color:{COLORS["text_light"]};margin-top:0;'
                f'margin-bottom:6px;{_M0}">{escape_html(strip_inline_markdown(art.meta))}</p>\n'
            )
        if art.summary:
            html += (
                f'<p style="font-size:15px;line-height:1.8;color:{COLORS["text_secondary"]};'
                f'margin-top:0;margin-bottom:0;{_M0}">{escape_html(art.summary)}</p>\n'
            )
        if art.keywords:
            html += _keyword_chips(art.keywords, compact=True)
        html += "</section>\n"
    return html


def _render_footer(footer: str, exclude: str) -> str:
    lines = [
        line for line in footer.split("\n")
        if line and not (exclude and exclude in line)
    ]
    if not lines:
        return ""
    html = (
        f'<section style="text-align:center;font-size:12px;color:{COLORS["text_light"]};'
        f'margin-top:16px;margin-bottom:0;{_M0}line-height:1.6;">\n'
    )
    for line in lines:
        html += f'<p style="margin-top:0;margin-bottom:4px;{_M0}">{escape_html(line)}</p>\n'
    html += "</section>\n"
    return html


def render_wechat_html(parsed: ParsedDigest, config: Optional[ArticleConfig] = None) -> str:
    """Render a ParsedDigest into a standalone inline-styled HTML page."""
    config = config or ArticleConfig()
    html = ""

    # Title + tagline
    title_text = re.sub(r'^📰\s*', "", strip_inline_markdown(parsed.title))
    html += (
        f'<h1 style="text-align:center;font-size:24px;font-weight:bold;color:{COLORS["text"]};'
        f'margin-top:10px;margin-bottom:6px;{_M0}line-height:1.4;">{escape_html(title_text)}</h1>\n'
    )
    tagline = config.tagline or parsed.subtitle
    if tagline:
        html += (
            f'<p style="text-align:center;font-size:14px;color:{COLORS["text_secondary"]};'
            f'margin-top:0;margin-bottom:24px;{_M0}">{escape_html(tagline)}</p>\n'
        )

    # Highlights callout
    if parsed.highlights:
        html += (
            f'<section style="background-color:{COLORS["bg_quote"]};border-left:4px solid '
            f'{COLORS["primary"]};border-radius:8px;padding-top:16px;padding-bottom:16px;'
            f'padding-left:18px;padding-right:18px;margin-top:0;margin-bottom:24px;{_M0}'
            f'font-size:15px;line-height:1.8;color:{COLORS["text"]};">\n'
        )
        html += (
            f'<strong style="display:block;margin-bottom:6px;font-size:16px;'
            f'color:{COLORS["primary"]};">📝 今日看点</strong>\n'
        )
        html += f"<span>{escape_html(parsed.highlights)}</span>\n"
        html += "</section>\n"

    if parsed.top_articles:
        html += _section_heading("🏆 今日必读 Top 3")
        for art in parsed.top_articles:
            html += _render_top_article(art)

    if parsed.stats:
        html += _render_stats(parsed.stats)

    if config.render_tag_cloud and parsed.tag_cloud:
        html += _render_tag_cloud(parsed.tag_cloud)

    html += _divider()

    for cat in parsed.categories:
        html += _render_category(cat)

    # Follow CTA
    html += _divider()
    html += '<section style="text-align:center;padding-top:20px;padding-bottom:20px;padding-left:0;padding-right:0;">\n'
    html += (
        f'<p style="font-size:16px;font-weight:bold;color:{COLORS["primary"]};margin-top:0;'
        f'margin-bottom:8px;{_M0}">{escape_html(config.cta_title)}</p>\n'
    )
    html += (
        f'<p style="font-size:14px;color:{COLORS["text_secondary"]};margin-top:0;'
        f'margin-bottom:12px;{_M0}">{escape_html(config.cta_subtitle)}</p>\n'
    )
    html += "</section>\n"

    if parsed.footer:
        html += _render_footer(parsed.footer, config.footer_exclude)

    return HTML_TEMPLATE.format(
        title=escape_html(strip_inline_markdown(parsed.title)),
        bg=COLORS["bg"],
        font_stack=FONT_STACK,
        text=COLORS["text"],
        content=html,
    )


async def convert_markdown_to_wechat_html(
    md_path: str | Path,
    html_path: str | Path,
    config: Optional[ArticleConfig] = None,
) -> None:
    """Read digest Markdown, render the WeChat article, write it as UTF-8."""
    md = await asyncio.to_thread(Path(md_path).read_text, encoding="utf-8")
    html = render_wechat_html(parse_digest_markdown(md), config)
    await asyncio.to_thread(Path(html_path).write_text, html, encoding="utf-8")
    logger.info("[wechat-html] HTML generated: %s", html_path)
