"""Command-line entry points.

Usage:
    digest-wechat-html <input.md> [output.html]        # WeChat article HTML
    digest-cover       <input.md> [output-cover.html]  # cover card HTML
    digest-screenshot  <cover.html> [output.png]       # cover PNG (Playwright)
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Awaitable, Callable, Optional, Sequence

from .config import load_config
from .publisher.cover_generator import generate_cover_html
from .publisher.screenshot import screenshot_cover
from .publisher.wechat_html import convert_markdown_to_wechat_html

logger = logging.getLogger(__name__)

Converter = Callable[[str, str], Awaitable[None]]


def default_output_path(input_path: str, old_suffix: str, new_suffix: str) -> str:
    """Swap old_suffix for new_suffix; append new_suffix if the input lacks it."""
    if input_path.endswith(old_suffix):
        return input_path[: -len(old_suffix)] + new_suffix
    return input_path + new_suffix


def _setup_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _run(
    argv: Optional[Sequence[str]],
    usage: str,
    suffixes: tuple[str, str],
    converter: Converter,
) -> None:
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print(usage)
        sys.exit(1)

    _setup_logging()
    input_path = args[0]
    output_path = args[1] if len(args) > 1 and args[1] else default_output_path(input_path, *suffixes)
    asyncio.run(converter(input_path, output_path))


def wechat_html_main(argv: Optional[Sequence[str]] = None) -> None:
    async def convert(input_path: str, output_path: str) -> None:
        await convert_markdown_to_wechat_html(input_path, output_path, load_config().article)

    _run(argv, "Usage: digest-wechat-html <input.md> [output.html]", (".md", ".html"), convert)


def cover_main(argv: Optional[Sequence[str]] = None) -> None:
    async def convert(input_path: str, output_path: str) -> None:
        await generate_cover_html(input_path, output_path, load_config().cover)

    _run(argv, "Usage: digest-cover <input.md> [output-cover.html]", (".md", "-cover.html"), convert)


def screenshot_main(argv: Optional[Sequence[str]] = None) -> None:
    _run(argv, "Usage: digest-screenshot <cover.html> [output.png]", (".html", ".png"), screenshot_cover)
