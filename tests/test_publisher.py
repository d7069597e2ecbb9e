"""Tests for the WeChat article renderer."""

import asyncio
from pathlib import Path

import pytest

from wechat_digest.parser.digest_parser import parse_digest_markdown
from wechat_digest.publisher.wechat_html import (
    CATEGORY_COLORS,
    COLORS,
    MEDAL_BORDER_COLORS,
    category_color,
    convert_markdown_to_wechat_html,
    render_wechat_html,
)
from wechat_digest.schemas import (
    ArticleConfig,
    CategoryArticle,
    CategorySection,
    Medal,
    ParsedDigest,
    TopArticle,
)

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(scope="module")
def digest():
    md = (FIXTURES / "sample_digest.md").read_text(encoding="utf-8")
    return parse_digest_markdown(md)


class TestRenderWechatHtml:
    def test_render_is_deterministic(self, digest):
        assert render_wechat_html(digest) == render_wechat_html(digest)

    def test_no_style_block(self, digest):
        html = render_wechat_html(digest)
        assert html.startswith("<!DOCTYPE html>")
        assert "<style" not in html
        assert "display:flex" not in html

    def test_title_without_newspaper_emoji(self, digest):
        html = render_wechat_html(digest)
        assert "<title>📰 AI 博客每日精选 — 2026-02-15</title>" in html
        assert ">AI 博客每日精选 — 2026-02-15</h1>" in html

    def test_title_escaped(self):
        html = render_wechat_html(ParsedDigest(title="<script>alert(1)</script>"))
        assert "<script>" not in html
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html

    def test_top_cards_medal_borders(self, digest):
        html = render_wechat_html(digest)
        for medal in Medal:
            assert f"border-left:4px solid {MEDAL_BORDER_COLORS[medal]}" in html
        assert html.index("🥇 推理成本") < html.index("🥈 Rust") < html.index("🥉 一次供应链")

    def test_meta_category_badge(self, digest):
        html = render_wechat_html(digest)
        assert f'background-color:{CATEGORY_COLORS["AI / ML"]};color:white;font-size:12px' in html
        assert ">🤖 AI / ML</span>" in html
        assert "<span>simonwillison.net</span> · <span>5 小时前</span>" in html

    def test_unlisted_emoji_not_badged(self):
        parsed = ParsedDigest(top_articles=[
            TopArticle(medal=Medal.GOLD, title_zh="T", meta="T — src · 🎨 设计"),
        ])
        html = render_wechat_html(parsed)
        assert "<span>src</span> · <span>🎨 设计</span>" in html
        assert "color:white" not in html

    def test_reason_and_keyword_chips(self, digest):
        html = render_wechat_html(digest)
        assert "<strong>推荐理由：</strong>对部署大模型的团队很有参考价值" in html
        for tag in ("推理", "成本", "部署"):
            assert f">{tag}</span>" in html

    def test_stats_table(self, digest):
        html = render_wechat_html(digest)
        assert "📊 数据概览" in html
        assert ">15 篇</p>" in html
        assert "**15 篇**" not in html
        for label in ("扫描源", "抓取文章", "时间范围", "精选"):
            assert f">{label}</p>" in html

    def test_no_stats_section_without_stats(self):
        html = render_wechat_html(ParsedDigest(title="T"))
        assert "数据概览" not in html
        assert "今日必读" not in html

    def test_tag_cloud_off_by_default(self, digest):
        html = render_wechat_html(digest)
        assert "AI 12" not in html

    def test_tag_cloud_opt_in(self):
        parsed = ParsedDigest(tag_cloud="**AI**(12) · 安全(4) · 噪声")
        html = render_wechat_html(parsed, ArticleConfig(render_tag_cloud=True))
        assert "font-weight:bold;padding-top:2px" in html
        assert ">AI 12</span>" in html
        assert ">安全 4</span>" in html
        assert "噪声" not in html

    def test_categories(self, digest):
        html = render_wechat_html(digest)
        assert ">🤖 AI / ML</span></h2>" in html
        assert ">1.</span> 小模型也能做复杂推理</p>" in html
        assert ">🛠 工具 / 开源</span></h2>" in html
        assert "🔒 安全</span></h2>" not in html

    def test_category_color_fallback(self):
        assert category_color("🔒 安全") == CATEGORY_COLORS["安全"]
        assert category_color("未知分类") == COLORS["tag_other"]

    def test_footer_excludes_marker(self, digest):
        html = render_wechat_html(digest)
        assert "生成于 2026-02-15 08:00" in html
        assert "懂点儿AI" not in html

    def test_subtitle_used_when_tagline_empty(self, digest):
        html = render_wechat_html(digest, ArticleConfig(tagline=""))
        assert "来自 Karpathy" in html

    def test_user_text_escaped_everywhere(self):
        parsed = ParsedDigest(
            top_articles=[TopArticle(medal=Medal.GOLD, title_zh='a "b" & <c>', keywords="<k>")],
            categories=[CategorySection(
                emoji="🤖", label="AI <x>",
                articles=[CategoryArticle(index="1", title_zh="<t>", summary="<s>")],
            )],
        )
        html = render_wechat_html(parsed)
        assert 'a &quot;b&quot; &amp; &lt;c&gt;' in html
        for raw in ("<k>", "<x>", "<t>", "<s>"):
            assert raw not in html


class TestConvertMarkdownToWechatHtml:
    def test_writes_html(self, tmp_path):
        out = tmp_path / "digest.html"
        asyncio.run(convert_markdown_to_wechat_html(FIXTURES / "sample_digest.md", out))
        html = out.read_text(encoding="utf-8")
        assert "今日必读 Top 3" in html

    def test_missing_input_propagates(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            asyncio.run(convert_markdown_to_wechat_html(tmp_path / "nope.md", tmp_path / "x.html"))
