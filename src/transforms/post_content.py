from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from src.transforms.pages import PageIn, month_year_label, prop_date_start, prop_select_name, prop_text
from src.transforms.rich_text import PayloadShapeError, rich_text_to_html


class BlockIn(BaseModel):
    # The payload lives under a key named after `type`, so keep extras.
    model_config = ConfigDict(extra="allow")

    type: str


def transform_post_header(page: PageIn) -> dict[str, Any]:
    props = page.properties
    return {
        "title": prop_text(props, "Title", kind="title"),
        "monthYear": month_year_label(prop_date_start(props, "Date"), long=True),
        "tag": prop_select_name(props, "Tag"),
    }


def transform_blocks(results: list[Any]) -> list[dict[str, Any]]:
    """
    Child blocks -> [{type, text}] in stored order.
    Types without a rich_text payload (image, divider, ...) are kept with text "".
    """
    blocks: list[dict[str, Any]] = []
    for item in results:
        try:
            b = BlockIn.model_validate(item)
        except ValidationError as e:
            raise PayloadShapeError(f"invalid block object: {e.error_count()} error(s)") from e

        content = (b.model_extra or {}).get(b.type)
        rich_text = content.get("rich_text") if isinstance(content, dict) else None
        blocks.append({"type": b.type, "text": rich_text_to_html(rich_text)})
    return blocks
