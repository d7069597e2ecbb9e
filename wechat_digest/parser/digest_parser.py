"""Digest parser — single forward pass over the daily digest Markdown.

The digest is produced by an upstream generator, so the parser is permissive:
lines it does not recognise are dropped and missing sections leave the
corresponding fields empty. It never raises on content.

Recognised layout::

    # 📰 AI 博客每日精选 — 2026-02-15
    > 来自 Karpathy 推荐的 90 个顶级技术博客 ...
    ## 📝 今日看点
    ## 🏆 今日必读
    🥇 **标题**
    [English Title](url) — source · time · 🤖 AI / ML
    > summary
    💡 **为什么值得读**: ...
    🏷️ kw1, kw2
    ## 📊 数据概览
    | 扫描源 | 抓取文章 | 时间范围 | 精选 |
    ### 🏷️ 话题标签
    **AI**(12) · 安全(4)
    ## 🤖 AI / ML
    ### 1. 标题
    ...
    *footer line*
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Callable, Optional

from ..schemas import (
    CategoryArticle,
    CategorySection,
    ParsedDigest,
    StatsRow,
    TopArticle,
)
from .inline import strip_inline_markdown, strip_links

logger = logging.getLogger(__name__)

MEDAL_RE = re.compile(r'^(🥇|🥈|🥉)\s+\*\*(.+)\*\*$')
CATEGORY_HEADER_RE = re.compile(r'^(\S+)\s+(.+)$')
CATEGORY_ARTICLE_RE = re.compile(r'^### (\d+)\.\s+(.+)$')
REASON_PREFIX_RE = re.compile(r'^💡\s*')
REASON_LABEL_RE = re.compile(r'^\*\*为什么值得读\*\*[:：]\s*')
KEYWORDS_PREFIX_RE = re.compile(r"^\U0001f3f7\ufe0f?\s*")
ALIGNMENT_CELL_RE = re.compile(r'^:?-+:?$')

SUBTITLE_PREFIX = "> 来自"
TAG_CLOUD_MARKER = "话题标签"

# Footer lines must sit within this many lines of the end of the document.
FOOTER_WINDOW = 9


class Section(str, Enum):
    NONE = "none"
    HIGHLIGHTS = "highlights"
    TOP = "top"
    STATS = "stats"
    TAGCLOUD = "tagcloud"
    CATEGORY = "category"


class _Skip(str, Enum):
    MERMAID = "mermaid"
    CODE = "code"
    DETAILS = "details"


# ## heading marker → section; anything else under ## is a category
SECTION_MARKERS: tuple[tuple[str, Section], ...] = (
    ("今日看点", Section.HIGHLIGHTS),
    ("今日必读", Section.TOP),
    ("数据概览", Section.STATS),
)


def _is_meta_line(text: str) -> bool:
    return text.startswith("[") and "](" in text and " — " in text


def _is_alignment_row(text: str) -> bool:
    if text.startswith("|:"):
        return True
    cells = [c.strip() for c in text.split("|") if c.strip()]
    return bool(cells) and all(ALIGNMENT_CELL_RE.match(c) for c in cells)


def _set_meta(draft: dict, text: str) -> None:
    draft["meta"] = strip_links(text)


def _append_summary(draft: dict, text: str) -> None:
    body = text[2:]
    draft["summary"] = f"{draft['summary']} {body}" if draft["summary"] else body


def _set_reason(draft: dict, text: str) -> None:
    draft["reason"] = REASON_LABEL_RE.sub("", REASON_PREFIX_RE.sub("", text))


def _set_keywords(draft: dict, text: str) -> None:
    draft["keywords"] = KEYWORDS_PREFIX_RE.sub("", text)


Rule = tuple[Callable[[str], bool], Callable[[dict, str], None]]

# Detail lines under a medal entry, first match wins.
TOP_ARTICLE_RULES: tuple[Rule, ...] = (
    (_is_meta_line, _set_meta),
    (lambda t: t.startswith("> "), _append_summary),
    (lambda t: t.startswith("💡"), _set_reason),
    (lambda t: t.startswith("🏷"), _set_keywords),
)

# Same as above, without the reason line.
CATEGORY_ARTICLE_RULES: tuple[Rule, ...] = (
    (_is_meta_line, _set_meta),
    (lambda t: t.startswith("> "), _append_summary),
    (lambda t: t.startswith("🏷"), _set_keywords),
)


class DigestParser:
    """Line scanner turning digest Markdown into a ParsedDigest."""

    def __init__(self) -> None:
        self._reset()

    def _reset(self) -> None:
        self.section = Section.NONE
        self._skip: Optional[_Skip] = None
        self._stats_rows = 0

        self._title = ""
        self._subtitle = ""
        self._highlights: list[str] = []
        self._top_articles: list[TopArticle] = []
        self._stats: Optional[StatsRow] = None
        self._categories: list[CategorySection] = []
        self._footer: list[str] = []
        self._tag_cloud = ""

        # In-progress records. The category draft owns its pending article,
        # so an article can never exist without a category.
        self._top_draft: Optional[dict] = None
        self._category: Optional[dict] = None

    def parse(self, md: str) -> ParsedDigest:
        self._reset()
        lines = md.split("\n")
        footer_start = len(lines) - FOOTER_WINDOW

        for i, line in enumerate(lines):
            trimmed = line.strip()

            if self._skip_block(trimmed):
                continue
            if self._handle_structure(trimmed):
                continue
            if self._dispatch(trimmed):
                continue

            if (
                i >= footer_start
                and trimmed.startswith("*")
                and trimmed.endswith("*")
            ):
                self._footer.append(strip_inline_markdown(trimmed))

        self._flush_top_article()
        self._flush_category()

        logger.debug(
            "Parsed digest: %d top articles, %d categories, stats=%s",
            len(self._top_articles), len(self._categories), self._stats is not None,
        )
        return ParsedDigest(
            title=self._title,
            subtitle=self._subtitle,
            highlights=" ".join(self._highlights),
            top_articles=self._top_articles,
            stats=self._stats,
            categories=self._categories,
            footer="\n".join(self._footer),
            tag_cloud=self._tag_cloud,
        )

    # ------------------------------------------------------------------
    # Line handlers — each returns True when the line is consumed
    # ------------------------------------------------------------------

    def _skip_block(self, text: str) -> bool:
        """Fenced code, mermaid diagrams and <details> blocks are skipped whole."""
        if self._skip is not None:
            if self._skip is _Skip.DETAILS:
                if text.startswith("</details>"):
                    self._skip = None
            elif text == "```":
                self._skip = None
            return True

        if text.startswith("```mermaid"):
            self._skip = _Skip.MERMAID
            return True
        if text.startswith("```"):
            self._skip = _Skip.CODE
            return True
        if text.startswith("<details>"):
            self._skip = _Skip.DETAILS
            return True
        return False

    def _handle_structure(self, text: str) -> bool:
        """Title, subtitle, ## headers, rules and the tag cloud sub-header."""
        if text.startswith("# "):
            self._title = text[2:]
            return True

        if text.startswith(SUBTITLE_PREFIX) and self.section is Section.NONE:
            self._subtitle = text[2:]
            return True

        if text.startswith("## "):
            self._enter_section(text[3:])
            return True

        if text == "---":
            return True

        if self.section is Section.STATS and text.startswith("### "):
            # Other ### headings here are chart labels with no data
            if TAG_CLOUD_MARKER in text:
                self.section = Section.TAGCLOUD
            return True

        if self.section is Section.TAGCLOUD and text and not text.startswith("#"):
            self._tag_cloud = text
            self.section = Section.STATS
            return True

        return False

    def _enter_section(self, heading: str) -> None:
        self._flush_top_article()
        self._flush_category()

        for marker, section in SECTION_MARKERS:
            if marker in heading:
                self.section = section
                if section is Section.STATS:
                    self._stats_rows = 0
                return

        self.section = Section.CATEGORY
        m = CATEGORY_HEADER_RE.match(heading)
        if m:
            self._category = {
                "emoji": m.group(1),
                "label": m.group(2),
                "articles": [],
                "pending": None,
            }

    def _dispatch(self, text: str) -> bool:
        if self.section is Section.HIGHLIGHTS:
            if text and not text.startswith("#"):
                self._highlights.append(text)
            return False
        if self.section is Section.TOP:
            return self._handle_top(text)
        if self.section is Section.STATS:
            self._handle_stats_row(text)
            return False
        if self.section is Section.CATEGORY:
            return self._handle_category(text)
        return False

    def _handle_top(self, text: str) -> bool:
        m = MEDAL_RE.match(text)
        if m:
            self._flush_top_article()
            self._top_draft = {
                "medal": m.group(1),
                "title_zh": m.group(2),
                "meta": "",
                "summary": "",
                "reason": "",
                "keywords": "",
            }
            return True

        if self._top_draft is None:
            return True
        return self._apply_rules(TOP_ARTICLE_RULES, self._top_draft, text)

    def _handle_stats_row(self, text: str) -> None:
        if not text.startswith("|") or _is_alignment_row(text):
            return
        self._stats_rows += 1
        if self._stats_rows != 2:
            return
        cells = [c.strip() for c in text.split("|") if c.strip()]
        if len(cells) >= 4:
            self._stats = StatsRow(
                sources=cells[0],
                articles=cells[1],
                time_range=cells[2],
                selected=cells[3],
            )

    def _handle_category(self, text: str) -> bool:
        if self._category is None:
            return True

        m = CATEGORY_ARTICLE_RE.match(text)
        if m:
            self._flush_category_article()
            self._category["pending"] = {
                "index": m.group(1),
                "title_zh": m.group(2),
                "meta": "",
                "summary": "",
                "keywords": "",
            }
            return True

        pending = self._category["pending"]
        if pending is None:
            return True
        return self._apply_rules(CATEGORY_ARTICLE_RULES, pending, text)

    @staticmethod
    def _apply_rules(rules: tuple[Rule, ...], draft: dict, text: str) -> bool:
        for matches, apply in rules:
            if matches(text):
                apply(draft, text)
                return True
        return False

    # ------------------------------------------------------------------
    # Flushing
    # ------------------------------------------------------------------

    def _flush_top_article(self) -> None:
        if self._top_draft and self._top_draft["title_zh"]:
            self._top_articles.append(TopArticle(**self._top_draft))
        self._top_draft = None

    def _flush_category_article(self) -> None:
        if self._category is None:
            return
        pending = self._category["pending"]
        if pending and pending["title_zh"]:
            self._category["articles"].append(CategoryArticle(**pending))
        self._category["pending"] = None

    def _flush_category(self) -> None:
        self._flush_category_article()
        if self._category and self._category["articles"]:
            self._categories.append(CategorySection(
                emoji=self._category["emoji"],
                label=self._category["label"],
                articles=self._category["articles"],
            ))
        self._category = None


def parse_digest_markdown(md: str) -> ParsedDigest:
    """Parse a digest Markdown document into a ParsedDigest."""
    return DigestParser().parse(md)
