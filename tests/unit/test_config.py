from __future__ import annotations

from pathlib import Path

import pytest

from src.utils.config import load_notion_config


_YAML = """
notion:
  base_url: https://api.notion.com/v1
  notion_version: "2022-06-28"
  timeout_seconds: 12
  token_env: TEST_NOTION_TOKEN
  posts_db_env: TEST_NOTION_POSTS_DB
  countries_db_env: TEST_NOTION_COUNTRIES_DB
read_api:
  allow_origin: https://example.com
"""


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("TEST_NOTION_TOKEN", "TEST_NOTION_POSTS_DB", "TEST_NOTION_COUNTRIES_DB", "NOTION_READ_API_CONFIG"):
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's local .env out of the picture.
    monkeypatch.setattr("src.utils.config.load_dotenv", lambda *a, **k: False)


def test_load_notion_config_resolves_env_values(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    p = tmp_path / "notion.yaml"
    p.write_text(_YAML, encoding="utf-8")
    monkeypatch.setenv("TEST_NOTION_TOKEN", "secret_x")
    monkeypatch.setenv("TEST_NOTION_POSTS_DB", "posts123")
    monkeypatch.setenv("TEST_NOTION_COUNTRIES_DB", " countries456 ")

    cfg = load_notion_config(str(p))
    assert cfg.base_url == "https://api.notion.com/v1"
    assert cfg.notion_version == "2022-06-28"
    assert cfg.timeout_seconds == 12.0
    assert cfg.token == "secret_x"
    assert cfg.posts_db_id == "posts123"
    assert cfg.countries_db_id == "countries456"
    assert cfg.allow_origin == "https://example.com"


def test_load_notion_config_allows_missing_secrets(tmp_path: Path) -> None:
    p = tmp_path / "notion.yaml"
    p.write_text(_YAML, encoding="utf-8")
    cfg = load_notion_config(str(p))
    assert cfg.token is None
    assert cfg.posts_db_id is None
    assert cfg.countries_db_id is None


def test_load_notion_config_path_from_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    p = tmp_path / "other.yaml"
    p.write_text(_YAML.replace("timeout_seconds: 12", "timeout_seconds: 3"), encoding="utf-8")
    monkeypatch.setenv("NOTION_READ_API_CONFIG", str(p))
    assert load_notion_config().timeout_seconds == 3.0


def test_load_notion_config_reports_missing_keys(tmp_path: Path) -> None:
    p = tmp_path / "notion.yaml"
    p.write_text("notion:\n  base_url: https://api.notion.com/v1\n", encoding="utf-8")
    with pytest.raises(ValueError) as ei:
        load_notion_config(str(p))
    msg = str(ei.value)
    assert "notion.notion_version" in msg
    assert "notion.token_env" in msg


def test_project_default_config_is_loadable() -> None:
    cfg = load_notion_config()
    assert cfg.base_url.startswith("https://api.notion.com")
    assert cfg.allow_origin == "*"
