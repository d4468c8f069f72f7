from __future__ import annotations

from contextlib import asynccontextmanager
import time
from typing import AsyncIterator, Awaitable, Callable
import uuid

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, Response

from src.notion.api_client import NotionClient
from src.read_api import service
from src.read_api.service import ClientFactory, ReadResult
from src.utils.config import NotionConfig, load_notion_config
from src.utils.logging import bind_request_context, clear_request_context, get_logger

logger = get_logger(component="read_api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # Config is read once per process and handed to every request explicitly.
    app.state.config = load_notion_config()
    logger.info(
        "read_api_config_loaded",
        token=bool(app.state.config.token),
        posts_db=bool(app.state.config.posts_db_id),
        countries_db=bool(app.state.config.countries_db_id),
    )
    yield


app = FastAPI(title="notion-site-read-api", version="v1", lifespan=lifespan)


def get_config(request: Request) -> NotionConfig:
    cfg = getattr(request.app.state, "config", None)
    if cfg is None:
        raise RuntimeError("NotionConfig not loaded (app started without lifespan)")
    return cfg


def get_client_factory() -> ClientFactory:
    return NotionClient


def _allow_origin(request: Request) -> str:
    cfg = getattr(request.app.state, "config", None)
    return cfg.allow_origin if cfg is not None else "*"


@app.middleware("http")
async def cors(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    """Fixed CORS policy: any origin, GET only, preflight answered without touching Notion."""
    origin = _allow_origin(request)
    if request.method == "OPTIONS":
        return Response(
            status_code=204,
            headers={
                "Access-Control-Allow-Origin": origin,
                "Access-Control-Allow-Methods": "GET",
                "Access-Control-Allow-Headers": "Content-Type",
            },
        )
    response = await call_next(request)
    response.headers["Access-Control-Allow-Origin"] = origin
    return response


@app.middleware("http")
async def request_context(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    bind_request_context(request_id=uuid.uuid4().hex[:12], path=request.url.path)
    started = time.perf_counter()
    try:
        response = await call_next(request)
        logger.info(
            "read_request_done",
            method=request.method,
            status=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000.0, 1),
        )
        return response
    finally:
        clear_request_context()


def _to_response(result: ReadResult) -> JSONResponse:
    return JSONResponse(status_code=result.status_code, content=result.body)


@app.get("/v1/health")
async def health(config: NotionConfig = Depends(get_config)) -> dict:
    # Reports presence only; never echoes secrets or ids.
    return {
        "ok": True,
        "service": "notion-site-read-api",
        "config": {
            "token": bool(config.token),
            "posts_db": bool(config.posts_db_id),
            "countries_db": bool(config.countries_db_id),
        },
    }


@app.get("/api/thoughts")
async def thoughts(
    config: NotionConfig = Depends(get_config),
    client_factory: ClientFactory = Depends(get_client_factory),
) -> JSONResponse:
    """Published posts, newest first."""
    return _to_response(await service.read_posts(config, client_factory=client_factory))


@app.get("/api/thought-content")
async def thought_content(
    slug: str | None = None,
    config: NotionConfig = Depends(get_config),
    client_factory: ClientFactory = Depends(get_client_factory),
) -> JSONResponse:
    """
    Full content of one published post as a list of {type, text} blocks.
    The front end renders the blocks into HTML.
    """
    return _to_response(await service.read_post_content(config, slug, client_factory=client_factory))


@app.get("/api/countries")
async def countries(
    config: NotionConfig = Depends(get_config),
    client_factory: ClientFactory = Depends(get_client_factory),
) -> JSONResponse:
    return _to_response(await service.read_countries(config, client_factory=client_factory))
