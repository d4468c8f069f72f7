from __future__ import annotations

import os
import sys

import httpx


def main() -> int:
    # Healthcheck runs inside the container; use localhost.
    port = int(os.getenv("READ_API_PORT", "8080"))
    resp = httpx.get(f"http://127.0.0.1:{port}/v1/health", timeout=2.5)
    resp.raise_for_status()
    payload = resp.json()
    if not payload.get("ok"):
        raise RuntimeError("health_not_ok")

    # Missing secrets only fail requests, not startup; surface them here.
    missing = [k for k, present in (payload.get("config") or {}).items() if not present]
    if missing:
        raise RuntimeError(f"config_missing:{','.join(sorted(missing))}")
    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except Exception as e:
        # Healthcheck must be terse and machine-readable for Docker.
        print(f"healthcheck_failed:{type(e).__name__}:{e}", file=sys.stderr)
        raise
