from __future__ import annotations

from typing import Any

from src.transforms.pages import parse_page, prop_text


# Countries database properties:
#   Name (title), Code (rich_text, ISO 3166-1 alpha-2), Flag (rich_text), Note (rich_text)
NAME_ASCENDING_SORTS: list[dict[str, Any]] = [{"property": "Name", "direction": "ascending"}]


def transform_countries(results: list[Any]) -> dict[str, Any]:
    """
    Query rows -> map widget payload, built in one pass so the three
    structures share order and filtering.

    Rows without code or name are skipped. A repeated code overwrites the
    `visited` entry but stays in both lists.
    """
    visited: dict[str, dict[str, str]] = {}
    visited_codes: list[str] = []
    visited_names: list[str] = []

    for item in results:
        props = parse_page(item).properties
        code = prop_text(props, "Code").strip().upper()
        name = prop_text(props, "Name", kind="title").strip()
        flag = prop_text(props, "Flag").strip()
        note = prop_text(props, "Note").strip()

        if not code or not name:
            continue
        visited[code] = {"name": name, "flag": flag, "note": note}
        visited_codes.append(code)
        visited_names.append(name)

    return {"visited": visited, "visitedCodes": visited_codes, "visitedNames": visited_names}
