from __future__ import annotations

from typing import Any

from src.transforms.pages import month_year_label, parse_page, prop_date_start, prop_select_name, prop_text


# Posts database properties:
#   Title (title), Slug (rich_text), Date (date), Tag (select),
#   Excerpt (rich_text), Published (checkbox)
PUBLISHED_FILTER: dict[str, Any] = {"property": "Published", "checkbox": {"equals": True}}
NEWEST_FIRST_SORTS: list[dict[str, Any]] = [{"property": "Date", "direction": "descending"}]


def published_slug_filter(slug: str) -> dict[str, Any]:
    return {
        "and": [
            PUBLISHED_FILTER,
            {"property": "Slug", "rich_text": {"equals": slug}},
        ]
    }


def transform_posts(results: list[Any]) -> list[dict[str, Any]]:
    """
    Query rows -> post summaries, upstream order preserved.
    Filtering/sorting is done by the query; nothing is dropped here.
    """
    rows: list[dict[str, Any]] = []
    for item in results:
        page = parse_page(item)
        props = page.properties
        date_str = prop_date_start(props, "Date")
        rows.append(
            {
                "id": page.id,
                "title": prop_text(props, "Title", kind="title"),
                "slug": prop_text(props, "Slug"),
                "date": date_str,
                "monthYear": month_year_label(date_str),
                "tag": prop_select_name(props, "Tag"),
                "excerpt": prop_text(props, "Excerpt"),
            }
        )
    return rows
