"""Тесты для CLI (`site_harvest.cli`) с использованием click.testing.CliRunner.
Проверяют команды `crawl`, `config`, `--version`, а также обработку ошибок.
"""
import json

import pytest
from click.testing import CliRunner

import site_harvest.cli as cli_module
from site_harvest.cli import cli
from site_harvest.crawler.models import Page, Paragraph, ScrapedData, Section


@pytest.fixture(autouse=True)
def patch_start_crawl(monkeypatch):
    """Патчим start_crawl: возвращаем одну страницу и запоминаем конфиг."""
    seen = {}

    def fake_crawl(cfg):
        seen["config"] = cfg
        data = ScrapedData()
        data.add(Page(url=str(cfg.seed_url), title="Intro", sections=(Section("Intro", (Paragraph("Hello"),)),)))
        return data

    monkeypatch.setattr(cli_module, "start_crawl", fake_crawl)
    return seen


@pytest.fixture()
def cfg_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "seed_url: https://example.com/\nmax_pages: 10\npoliteness_delay_ms: 0\n"
        f"output: {tmp_path / 'default_out.json'}\n",
        encoding="utf-8",
    )
    return path


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "SiteHarvest" in result.output


def test_show_config(cfg_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "--limit", "3", "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["seed_url"] == "https://example.com/"
    assert data["max_pages"] == 3


def test_crawl_stdout(cfg_file, patch_start_crawl):
    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["--config", str(cfg_file), "--log-level", "CRITICAL", "crawl", "--stdout", "--compact",
         "--seed", "https://example.org/start"],
    )
    assert result.exit_code == 0
    output = json.loads(result.output)
    assert output["pages"][0]["url"] == "https://example.org/start"
    assert output["pages"][0]["sections"][0]["content"] == [{"paragraph": "Hello"}]
    assert patch_start_crawl["config"].max_pages == 10


def test_crawl_writes_default_output(cfg_file, tmp_path):
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "crawl"])
    assert result.exit_code == 0
    assert "Scraped 1 pages" in result.output
    data = json.loads((tmp_path / "default_out.json").read_text(encoding="utf-8"))
    assert data["pages"][0]["title"] == "Intro"


def test_crawl_json_and_html_files(cfg_file, tmp_path, patch_start_crawl):
    out = tmp_path / "out" / "data.json"
    html = tmp_path / "out" / "report.html"
    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["--config", str(cfg_file), "-l", "1", "crawl", "--json", str(out), "--html", str(html),
         "--delay-ms", "1500"],
    )
    assert result.exit_code == 0
    assert json.loads(out.read_text(encoding="utf-8"))["pages"][0]["url"] == "https://example.com/"
    assert "Intro" in html.read_text(encoding="utf-8")
    cfg = patch_start_crawl["config"]
    assert cfg.max_pages == 1
    assert cfg.politeness_delay_ms == 1500


def test_crawl_write_failure(cfg_file, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "crawl", "--json", str(blocker / "x.json")])
    assert result.exit_code == 1
    assert "Ошибка при сохранении отчёта" in result.output


def test_invalid_config(tmp_path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("max_pages: 3\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(bad), "config"])
    assert result.exit_code == 1
    assert "Ошибка загрузки конфигурации" in result.output


def test_invalid_seed_override(cfg_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "crawl", "--seed", "not a url"])
    assert result.exit_code == 1
    assert "Некорректные параметры" in result.output
