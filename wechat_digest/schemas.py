"""Pydantic schemas for the digest document model and publishing config."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Medal(str, Enum):
    GOLD = "🥇"
    SILVER = "🥈"
    BRONZE = "🥉"


# ---------------------------------------------------------------------------
# Parsed digest
# ---------------------------------------------------------------------------

class TopArticle(BaseModel):
    """One of the medal-ranked 今日必读 entries."""
    model_config = ConfigDict(frozen=True)

    medal: Medal
    title_zh: str
    meta: str = ""
    summary: str = ""
    reason: str = ""
    keywords: str = ""  # comma separated, unsplit


class CategoryArticle(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: str
    title_zh: str
    meta: str = ""
    summary: str = ""
    keywords: str = ""


class CategorySection(BaseModel):
    model_config = ConfigDict(frozen=True)

    emoji: str
    label: str
    articles: list[CategoryArticle] = Field(default_factory=list)


class StatsRow(BaseModel):
    """Data row of the 数据概览 table."""
    model_config = ConfigDict(frozen=True)

    sources: str
    articles: str
    time_range: str
    selected: str


class ParsedDigest(BaseModel):
    """Core data unit — the whole digest, built once per conversion."""
    model_config = ConfigDict(frozen=True)

    title: str = ""
    subtitle: str = ""
    highlights: str = ""
    top_articles: list[TopArticle] = Field(default_factory=list)
    stats: Optional[StatsRow] = None
    categories: list[CategorySection] = Field(default_factory=list)
    footer: str = ""
    tag_cloud: str = ""


class CoverData(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: str = ""
    top3: list[str] = Field(default_factory=list)
    top_keywords: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Publishing config (parsed from config/digest.yaml)
# ---------------------------------------------------------------------------

class ArticleConfig(BaseModel):
    tagline: str = "90个顶级技术博客。AI精选每日必读。"
    cta_title: str = "📬 每日精选，不错过任何技术热点"
    cta_subtitle: str = "关注「碳硅边界」公众号，获取更多 AI 实用技巧"
    footer_exclude: str = "懂点儿AI"
    render_tag_cloud: bool = False


class CoverConfig(BaseModel):
    account_name: str = "碳硅边界"
    title: str = "📰 推特AI降噪"
    badge: str = "Powered by Gemini AI · 90 RSS Sources"
    title_max_len: int = 30


class DigestConfig(BaseModel):
    article: ArticleConfig = Field(default_factory=ArticleConfig)
    cover: CoverConfig = Field(default_factory=CoverConfig)
