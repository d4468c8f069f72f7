from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from src.notion.api_client import ListResult, NotionClient, NotionClientError, NotionConfigError
from src.transforms.countries import NAME_ASCENDING_SORTS, transform_countries
from src.transforms.pages import parse_page
from src.transforms.post_content import transform_blocks, transform_post_header
from src.transforms.posts import NEWEST_FIRST_SORTS, PUBLISHED_FILTER, published_slug_filter, transform_posts
from src.transforms.rich_text import PayloadShapeError
from src.utils.config import NotionConfig
from src.utils.logging import get_logger

logger = get_logger(component="read_api_service")

ClientFactory = Callable[[NotionConfig], NotionClient]

POSTS_ERROR = "Failed to load posts."
POST_CONTENT_ERROR = "Failed to load post content."
COUNTRIES_ERROR = "Failed to load countries."
MISSING_SLUG_ERROR = "Missing ?slug= parameter."
POST_NOT_FOUND_ERROR = "Post not found."


class FailureKind(str, Enum):
    CONFIG = "config"
    UPSTREAM = "upstream"
    PAYLOAD = "payload"
    INTERNAL = "internal"


_FAILURE_EVENTS = {
    FailureKind.CONFIG: "read_config_missing",
    FailureKind.UPSTREAM: "read_upstream_failed",
    FailureKind.PAYLOAD: "read_payload_invalid",
    FailureKind.INTERNAL: "read_internal_error",
}


@dataclass(frozen=True)
class ReadResult:
    status_code: int
    body: dict[str, Any]
    failure: FailureKind | None = None

    @property
    def ok(self) -> bool:
        return self.status_code == 200


def classify_failure(err: BaseException) -> FailureKind:
    # NotionConfigError subclasses NotionClientError, so it must be checked first.
    if isinstance(err, NotionConfigError):
        return FailureKind.CONFIG
    if isinstance(err, NotionClientError):
        return FailureKind.UPSTREAM
    if isinstance(err, PayloadShapeError):
        return FailureKind.PAYLOAD
    return FailureKind.INTERNAL


def _failed(endpoint: str, message: str, err: Exception) -> ReadResult:
    kind = classify_failure(err)
    logger.error(
        _FAILURE_EVENTS[kind],
        endpoint=endpoint,
        failure=kind.value,
        err_type=type(err).__name__,
        err=str(err),
        exc_info=kind is FailureKind.INTERNAL,
    )
    return ReadResult(status_code=500, body={"error": message}, failure=kind)


def _warn_if_truncated(res: ListResult, *, endpoint: str, source: str) -> None:
    # Only the first upstream page is ever used.
    if res.has_more:
        logger.warning("notion_results_truncated", endpoint=endpoint, source=source, returned=len(res.results))


async def read_posts(config: NotionConfig, *, client_factory: ClientFactory = NotionClient) -> ReadResult:
    endpoint = "thoughts"
    try:
        async with client_factory(config) as client:
            res = await client.query_database(
                config.posts_db_id,
                filter=PUBLISHED_FILTER,
                sorts=NEWEST_FIRST_SORTS,
            )
        _warn_if_truncated(res, endpoint=endpoint, source="posts_db")
        posts = transform_posts(res.results)
    except Exception as e:
        return _failed(endpoint, POSTS_ERROR, e)

    logger.info("read_posts_ok", posts=len(posts))
    return ReadResult(status_code=200, body={"posts": posts})


async def read_post_content(
    config: NotionConfig,
    slug: str | None,
    *,
    client_factory: ClientFactory = NotionClient,
) -> ReadResult:
    endpoint = "thought_content"
    if not slug:
        return ReadResult(status_code=400, body={"error": MISSING_SLUG_ERROR})

    try:
        async with client_factory(config) as client:
            found = await client.query_database(config.posts_db_id, filter=published_slug_filter(slug))
            if not found.results:
                logger.info("read_post_not_found", slug=slug)
                return ReadResult(status_code=404, body={"error": POST_NOT_FOUND_ERROR})

            # Slugs are expected to be unique; first match wins.
            page = parse_page(found.results[0])
            children = await client.list_block_children(page.id)
        _warn_if_truncated(children, endpoint=endpoint, source="blocks")
        body = transform_post_header(page)
        body["blocks"] = transform_blocks(children.results)
    except Exception as e:
        return _failed(endpoint, POST_CONTENT_ERROR, e)

    logger.info("read_post_content_ok", slug=slug, blocks=len(body["blocks"]))
    return ReadResult(status_code=200, body=body)


async def read_countries(config: NotionConfig, *, client_factory: ClientFactory = NotionClient) -> ReadResult:
    endpoint = "countries"
    try:
        async with client_factory(config) as client:
            res = await client.query_database(config.countries_db_id, sorts=NAME_ASCENDING_SORTS)
        _warn_if_truncated(res, endpoint=endpoint, source="countries_db")
        body = transform_countries(res.results)
    except Exception as e:
        return _failed(endpoint, COUNTRIES_ERROR, e)

    logger.info("read_countries_ok", countries=len(body["visitedCodes"]))
    return ReadResult(status_code=200, body=body)
