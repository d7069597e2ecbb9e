"""Cover data extraction — date, top-3 titles and leading tag cloud keywords."""

from __future__ import annotations

import logging
import re

from ..schemas import CoverData
from .digest_parser import MEDAL_RE

logger = logging.getLogger(__name__)

DATE_RE = re.compile(r'(\d{4}-\d{2}-\d{2})')
TAG_TOKEN_RE = re.compile(r'\*?\*?(.+?)\*?\*?\((\d+)\)$')

MAX_TOP = 3
MAX_KEYWORDS = 5


def parse_cover_data(md: str) -> CoverData:
    """Scan the whole document, independent of the digest section state."""
    lines = md.split("\n")

    date = ""
    for line in lines:
        m = DATE_RE.search(line)
        if m:
            date = m.group(1)
            break

    top3: list[str] = []
    for line in lines:
        m = MEDAL_RE.match(line.strip())
        if m and len(top3) < MAX_TOP:
            top3.append(m.group(2))

    keywords: list[str] = []
    for line in lines:
        stripped = line.strip()
        if "(" in stripped and " · " in stripped:
            for part in stripped.split(" · ")[:MAX_KEYWORDS]:
                m = TAG_TOKEN_RE.search(part)
                if m:
                    keywords.append(m.group(1).replace("*", ""))
            break

    logger.debug("Cover data: date=%s, %d titles, %d keywords", date, len(top3), len(keywords))
    return CoverData(date=date, top3=top3, top_keywords=keywords)
