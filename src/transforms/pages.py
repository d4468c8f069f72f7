from __future__ import annotations

from datetime import date as Date
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from src.transforms.rich_text import PayloadShapeError, rich_text_to_plain


_MONTHS_SHORT = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_MONTHS_LONG = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


class PageIn(BaseModel):
    id: str
    properties: dict[str, Any] = Field(default_factory=dict)


def parse_page(item: Any) -> PageIn:
    try:
        return PageIn.model_validate(item)
    except ValidationError as e:
        raise PayloadShapeError(f"invalid page object: {e.error_count()} error(s)") from e


def _prop(props: dict[str, Any], name: str) -> dict[str, Any]:
    value = props.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise PayloadShapeError(f"property {name!r} is not an object")
    return value


def prop_text(props: dict[str, Any], name: str, kind: str = "rich_text") -> str:
    """Plain text of a `title` or `rich_text` property; "" when unset."""
    return rich_text_to_plain(_prop(props, name).get(kind))


def prop_select_name(props: dict[str, Any], name: str) -> str:
    select = _prop(props, name).get("select") or {}
    return str(select.get("name") or "")


def prop_date_start(props: dict[str, Any], name: str) -> str | None:
    d = _prop(props, name).get("date") or {}
    start = d.get("start")
    return str(start) if start else None


def month_year_label(date_str: str | None, *, long: bool = False) -> str:
    """
    "Jan 2024" (or "January 2024" with long=True) for the calendar date part of
    an ISO date/datetime string. "" when absent or unparseable.
    """
    if not date_str:
        return ""
    try:
        d = Date.fromisoformat(date_str[:10])
    except ValueError:
        return ""
    months = _MONTHS_LONG if long else _MONTHS_SHORT
    return f"{months[d.month - 1]} {d.year}"
