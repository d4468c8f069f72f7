from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

import uvicorn

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    # When running as /app/scripts/serve_read_api.py, sys.path[0] is /app/scripts,
    # so `import src.*` fails unless /app is on sys.path.
    sys.path.insert(0, str(PROJECT_ROOT))

from src.utils.logging import get_logger, setup_logging  # noqa: E402

logger = get_logger(script="serve_read_api")


def main() -> int:
    setup_logging()
    parser = argparse.ArgumentParser(description="Serve the Notion site read API (thoughts, thought content, countries)")
    parser.add_argument("--host", default=os.getenv("READ_API_HOST", "0.0.0.0"))
    parser.add_argument("--port", type=int, default=int(os.getenv("READ_API_PORT", "8080")))
    parser.add_argument("--config", default=None, help="Path to notion.yaml (overrides NOTION_READ_API_CONFIG)")
    parser.add_argument("--reload", action="store_true", help="Auto-reload on code changes (dev only)")
    args = parser.parse_args()

    if args.config:
        os.environ["NOTION_READ_API_CONFIG"] = str(Path(args.config).resolve())

    logger.info("read_api_starting", host=args.host, port=args.port, reload=args.reload)
    # log_config=None keeps our structlog/root handler setup instead of uvicorn's default dictConfig.
    uvicorn.run("src.read_api.app:app", host=args.host, port=args.port, reload=args.reload, log_config=None)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
