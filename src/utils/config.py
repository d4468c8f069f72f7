from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import os
import yaml
from dotenv import load_dotenv


@dataclass(frozen=True)
class NotionConfig:
    base_url: str
    notion_version: str
    timeout_seconds: float
    # Secrets are resolved from env at load time but may be missing; the client
    # refuses to start a request without them.
    token: str | None
    posts_db_id: str | None
    countries_db_id: str | None
    allow_origin: str = "*"


def _project_root() -> Path:
    # Resolve from this file: .../src/utils/config.py -> project root is 3 parents up.
    return Path(__file__).resolve().parents[2]


def _env_or_none(name: str) -> str | None:
    raw = (os.getenv(name) or "").strip()
    return raw or None


def load_notion_config(path: str | None = None) -> NotionConfig:
    """
    Load Notion + read API config from YAML.

    Precedence:
    - explicit `path`
    - env `NOTION_READ_API_CONFIG`
    - project default `config/notion.yaml`

    The YAML names the env vars holding the token and database ids; the values
    themselves come from the environment (or `.env`).
    """
    load_dotenv()
    cfg_path = Path(path or os.getenv("NOTION_READ_API_CONFIG") or (_project_root() / "config" / "notion.yaml"))
    cfg = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    notion = cfg.get("notion") or {}
    read_api = cfg.get("read_api") or {}

    base_url = notion.get("base_url")
    notion_version = notion.get("notion_version")
    timeout_seconds = notion.get("timeout_seconds")
    token_env = notion.get("token_env")
    posts_db_env = notion.get("posts_db_env")
    countries_db_env = notion.get("countries_db_env")

    missing: list[str] = []
    if not base_url:
        missing.append("notion.base_url")
    if not notion_version:
        missing.append("notion.notion_version")
    if timeout_seconds is None:
        missing.append("notion.timeout_seconds")
    if not token_env:
        missing.append("notion.token_env")
    if not posts_db_env:
        missing.append("notion.posts_db_env")
    if not countries_db_env:
        missing.append("notion.countries_db_env")
    if missing:
        raise ValueError(f"Missing {', '.join(missing)} in {cfg_path}")

    return NotionConfig(
        base_url=str(base_url),
        notion_version=str(notion_version),
        timeout_seconds=float(timeout_seconds),
        token=_env_or_none(str(token_env)),
        posts_db_id=_env_or_none(str(posts_db_env)),
        countries_db_id=_env_or_none(str(countries_db_env)),
        allow_origin=str(read_api.get("allow_origin") or "*"),
    )
