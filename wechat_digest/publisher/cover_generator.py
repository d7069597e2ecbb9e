"""Cover generator — renders the 900x383 WeChat cover card as HTML."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

from ..parser.cover_parser import parse_cover_data
from ..parser.inline import escape_html
from ..schemas import CoverConfig, CoverData, Medal

logger = logging.getLogger(__name__)

COVER_WIDTH = 900
COVER_HEIGHT = 383

_MEDALS = (Medal.GOLD, Medal.SILVER, Medal.BRONZE)
# Per-rank (opacity, font-size) for the top-3 lines
_RANK_STYLES = (("1", "20px"), ("0.85", "17px"), ("0.7", "17px"))

COVER_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="UTF-8">
<style>
  * {{ margin: 0; padding: 0; box-sizing: border-box; }}
  body {{ width: {width}px; height: {height}px; overflow: hidden; }}
</style>
</head>
<body>
<div style="width:{width}px;height:{height}px;background:linear-gradient(135deg,#1a0a00 0%,#3d1800 25%,#8b3a00 55%,#d4760a 80%,#f5a623 100%);color:white;font-family:-apple-system,BlinkMacSystemFont,'Segoe UI','PingFang SC','Microsoft YaHei',sans-serif;position:relative;overflow:hidden;">

<!-- Decorative circles (warm glow) -->
<div style="position:absolute;top:-60px;right:-40px;width:280px;height:280px;border-radius:50%;background:rgba(245,166,35,0.15);"></div>
<div style="position:absolute;bottom:-80px;left:-60px;width:220px;height:220px;border-radius:50%;background:rgba(255,140,0,0.1);"></div>
<div style="position:absolute;top:30px;right:100px;width:100px;height:100px;border-radius:50%;background:rgba(255,200,50,0.08);"></div>

<div style="position:relative;z-index:1;padding:36px 48px;">

  <div style="margin-bottom:16px;">
    <span style="font-size:13px;color:rgba(255,255,255,0.6);letter-spacing:2px;">DAILY TECH DIGEST</span>
    <span style="float:right;font-size:13px;color:rgba(255,255,255,0.5);">{account_name}</span>
  </div>

  <div style="font-size:32px;font-weight:bold;margin-bottom:6px;letter-spacing:1px;">{cover_title}</div>
  <div style="font-size:18px;color:rgba(255,255,255,0.7);margin-bottom:24px;">{date_display}</div>

  <div style="width:60px;height:3px;background:rgba(255,220,150,0.6);border-radius:2px;margin-bottom:20px;"></div>

  <div style="color:rgba(255,255,255,0.95);line-height:1.5;">
{top_items_html}  </div>

  {keywords_html}

  <div style="position:absolute;bottom:28px;right:48px;font-size:12px;color:rgba(255,255,255,0.4);">{badge}</div>

</div>
</div>
</body>
</html>"""


def truncate(text: str, max_len: int) -> str:
    """Cut to max_len code points and append an ellipsis."""
    return text[:max_len] + "…" if len(text) > max_len else text


def format_date(date_str: str) -> str:
    """2026-02-15 → 2026年2月15日; anything not shaped like Y-M-D is returned as-is.

    No calendar check: 2026-02-30 still becomes 2026年2月30日.
    """
    parts = date_str.split("-")
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        return date_str
    year, month, day = parts
    return f"{year}年{int(month)}月{int(day)}日"


def render_cover_html(data: CoverData, config: Optional[CoverConfig] = None) -> str:
    """Build the cover HTML from extracted cover data."""
    config = config or CoverConfig()

    top_items: list[str] = []
    for medal, title, (opacity, font_size) in zip(_MEDALS, data.top3, _RANK_STYLES):
        top_items.append(
            f'<div style="opacity:{opacity};font-size:{font_size};margin-bottom:8px;'
            f'white-space:nowrap;overflow:hidden;text-overflow:ellipsis;max-width:700px;">'
            f'{medal.value} {escape_html(truncate(title, config.title_max_len), quote=False)}</div>\n'
        )

    chips = "".join(
        f'<span style="display:inline-block;border:1px solid rgba(255,220,150,0.5);'
        f'color:rgba(255,235,200,0.9);font-size:12px;padding:2px 10px;border-radius:12px;'
        f'margin-right:6px;margin-bottom:4px;">{escape_html(kw, quote=False)}</span>'
        for kw in data.top_keywords[:5]
    )
    keywords_html = (
        f'<div style="position:absolute;bottom:28px;left:48px;">{chips}</div>' if chips else ""
    )

    return COVER_TEMPLATE.format(
        width=COVER_WIDTH,
        height=COVER_HEIGHT,
        account_name=escape_html(config.account_name, quote=False),
        cover_title=escape_html(config.title, quote=False),
        date_display=escape_html(format_date(data.date), quote=False),
        top_items_html="".join(top_items),
        keywords_html=keywords_html,
        badge=escape_html(config.badge, quote=False),
    )


async def generate_cover_html(
    md_path: str | Path,
    cover_path: str | Path,
    config: Optional[CoverConfig] = None,
) -> None:
    """Read digest Markdown and write the cover HTML next to it."""
    md = await asyncio.to_thread(Path(md_path).read_text, encoding="utf-8")
    html = render_cover_html(parse_cover_data(md), config)
    await asyncio.to_thread(Path(cover_path).write_text, html, encoding="utf-8")
    logger.info("[cover] Cover HTML generated: %s", cover_path)
