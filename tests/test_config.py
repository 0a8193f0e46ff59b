import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from site_harvest.config import DEFAULT_USER_AGENT, HarvestConfig, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("seed_url: http://example.com", ".yaml", None),
        (json.dumps({"seed_url": "http://example.com"}), ".json", None),
        ("{}", ".json", ValidationError),
        ("seed_url: [unclosed", ".yaml", ValueError),
        ("- just\n- a list", ".yml", TypeError),
        ("[1, 2]", ".json", TypeError),
        ("{not json", ".json", ValueError),
        ("seed_url: http://example.com\nunknown: 1", ".yaml", ValidationError),
        ("seed_url: http://example.com\nmax_pages: -1", ".yaml", ValidationError),
        ("seed_url: not a url", ".yaml", ValidationError),
        ("seed_url = 'http://example.com'", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, HarvestConfig)
        assert str(cfg.seed_url).rstrip("/") == "http://example.com"


def test_defaults(tmp_path):
    cfg = load_config(write_file(tmp_path, "seed_url: ' https://example.com/blog '", ".yaml"))
    assert str(cfg.seed_url) == "https://example.com/blog"
    assert cfg.max_pages == 200
    assert cfg.politeness_delay_ms == 500
    assert cfg.politeness_delay == 0.5
    assert cfg.user_agent == DEFAULT_USER_AGENT
    assert cfg.output == "scraped_data.json"


def test_load_config_default_missing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(FileNotFoundError):
        load_config(None)


def test_load_config_default_present(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text("seed_url: https://example.org\nmax_pages: 3\n")
    assert load_config(None).max_pages == 3


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_overrides_are_validated():
    cfg = HarvestConfig(seed_url="https://example.com")
    assert cfg.with_overrides(max_pages=None) is cfg
    updated = cfg.with_overrides(max_pages=5, seed_url="https://example.org/start")
    assert updated.max_pages == 5
    assert str(updated.seed_url) == "https://example.org/start"
    assert cfg.max_pages == 200
    with pytest.raises(ValidationError):
        cfg.with_overrides(politeness_delay_ms=-5)


def test_config_is_frozen():
    cfg = HarvestConfig(seed_url="https://example.com")
    with pytest.raises(ValidationError):
        cfg.max_pages = 1
