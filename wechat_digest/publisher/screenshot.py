"""Cover screenshot — rasterizes the cover HTML to PNG with headless Chromium."""

from __future__ import annotations

import logging
from pathlib import Path

from .cover_generator import COVER_HEIGHT, COVER_WIDTH

logger = logging.getLogger(__name__)

DEVICE_SCALE_FACTOR = 2
CHROMIUM_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]


class CoverScreenshotter:
    """Render a local HTML file to a fixed-size PNG using Playwright."""

    def __init__(
        self,
        width: int = COVER_WIDTH,
        height: int = COVER_HEIGHT,
        device_scale_factor: int = DEVICE_SCALE_FACTOR,
    ):
        self.width = width
        self.height = height
        self.device_scale_factor = device_scale_factor

    async def capture(self, html_path: str | Path, png_path: str | Path) -> str:
        """Open html_path, wait for network idle, screenshot the clip to png_path."""
        from playwright.async_api import async_playwright

        file_url = Path(html_path).resolve().as_uri()
        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=True, args=CHROMIUM_ARGS)
            page = await browser.new_page(
                viewport={"width": self.width, "height": self.height},
                device_scale_factor=self.device_scale_factor,
            )
            await page.goto(file_url, wait_until="networkidle")
            await page.screenshot(
                path=str(png_path),
                type="png",
                clip={"x": 0, "y": 0, "width": self.width, "height": self.height},
            )
            await browser.close()
        logger.debug("Rendered cover PNG: %s (%dx%d @%dx)",
                     png_path, self.width, self.height, self.device_scale_factor)
        return str(png_path)


async def screenshot_cover(html_path: str | Path, png_path: str | Path) -> None:
    """Rasterize a cover HTML file into a 900x383 PNG."""
    await CoverScreenshotter().capture(html_path, png_path)
    logger.info("[screenshot] Cover PNG generated: %s", png_path)
