"""Tests for the command-line entry points and config loading."""

import logging
import shutil
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from wechat_digest import cli
from wechat_digest.config import DEFAULT_CONFIG_PATH, load_config
from wechat_digest.schemas import DigestConfig

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def digest_md(tmp_path, monkeypatch):
    monkeypatch.delenv("DIGEST_CONFIG", raising=False)
    path = tmp_path / "2026-02-15.md"
    shutil.copy(FIXTURES / "sample_digest.md", path)
    return path


class TestDefaultOutputPath:
    def test_replaces_suffix(self):
        assert cli.default_output_path("out/d.md", ".md", ".html") == "out/d.html"
        assert cli.default_output_path("d.md", ".md", "-cover.html") == "d-cover.html"
        assert cli.default_output_path("c.html", ".html", ".png") == "c.png"

    def test_appends_when_suffix_missing(self):
        assert cli.default_output_path("digest.txt", ".md", ".html") == "digest.txt.html"


class TestEntryPoints:
    @pytest.mark.parametrize("main", [cli.wechat_html_main, cli.cover_main, cli.screenshot_main])
    def test_usage_without_args(self, main, capsys):
        with pytest.raises(SystemExit) as exc:
            main([])
        assert exc.value.code == 1
        assert capsys.readouterr().out.startswith("Usage:")

    @pytest.mark.parametrize("main", [cli.wechat_html_main, cli.cover_main])
    def test_usage_even_with_broken_config(self, main, tmp_path, monkeypatch, capsys):
        bad = tmp_path / "bad.yaml"
        bad.write_text("cover:\n  title_max_len: lots\n", encoding="utf-8")
        monkeypatch.setenv("DIGEST_CONFIG", str(bad))
        with pytest.raises(SystemExit) as exc:
            main([])
        assert exc.value.code == 1
        assert capsys.readouterr().out.startswith("Usage:")

    def test_wechat_html_default_output(self, digest_md, caplog):
        caplog.set_level(logging.INFO)
        cli.wechat_html_main([str(digest_md)])
        out = digest_md.with_suffix(".html")
        html = out.read_text(encoding="utf-8")
        assert "推理成本下降十倍的秘密" in html
        assert f"HTML generated: {out}" in caplog.text

    def test_cover_explicit_output(self, digest_md, tmp_path):
        out = tmp_path / "custom.html"
        cli.cover_main([str(digest_md), str(out)])
        assert "width:900px" in out.read_text(encoding="utf-8")
        assert not (tmp_path / "2026-02-15-cover.html").exists()

    def test_cover_default_output(self, digest_md, tmp_path):
        cli.cover_main([str(digest_md)])
        assert (tmp_path / "2026-02-15-cover.html").exists()

    def test_screenshot_default_output(self):
        with patch("wechat_digest.cli.screenshot_cover", new=AsyncMock()) as shot:
            cli.screenshot_main(["build/cover.html"])
        shot.assert_awaited_once_with("build/cover.html", "build/cover.png")

    def test_missing_input_propagates(self, tmp_path, monkeypatch):
        monkeypatch.delenv("DIGEST_CONFIG", raising=False)
        with pytest.raises(FileNotFoundError):
            cli.wechat_html_main([str(tmp_path / "missing.md")])


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "none.yaml") == DigestConfig()

    def test_repo_config_matches_defaults(self):
        assert DEFAULT_CONFIG_PATH.exists()
        assert load_config(DEFAULT_CONFIG_PATH) == DigestConfig()

    def test_env_resolution(self, tmp_path, monkeypatch):
        monkeypatch.setenv("WECHAT_ACCOUNT", "我的公众号")
        path = tmp_path / "digest.yaml"
        path.write_text(
            "cover:\n  account_name: ${WECHAT_ACCOUNT}\narticle:\n  render_tag_cloud: true\n",
            encoding="utf-8",
        )
        config = load_config(path)
        assert config.cover.account_name == "我的公众号"
        assert config.article.render_tag_cloud is True
        assert config.article.footer_exclude == "懂点儿AI"

    def test_env_var_selects_file(self, tmp_path, monkeypatch):
        path = tmp_path / "other.yaml"
        path.write_text("cover:\n  title: 别的标题\n", encoding="utf-8")
        monkeypatch.setenv("DIGEST_CONFIG", str(path))
        assert load_config().cover.title == "别的标题"
