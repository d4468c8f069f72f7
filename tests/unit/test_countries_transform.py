from __future__ import annotations

import json

from src.transforms.countries import NAME_ASCENDING_SORTS, transform_countries


def _rt(text: str) -> list[dict]:
    return [{"type": "text", "plain_text": text, "href": None, "annotations": {"bold": False, "italic": False}}] if text else []


def _country(*, code: str = "", name: str = "", flag: str = "", note: str = "") -> dict:
    return {
        "object": "page",
        "id": f"c-{code or name or 'empty'}",
        "properties": {
            "Name": {"type": "title", "title": _rt(name)},
            "Code": {"type": "rich_text", "rich_text": _rt(code)},
            "Flag": {"type": "rich_text", "rich_text": _rt(flag)},
            "Note": {"type": "rich_text", "rich_text": _rt(note)},
        },
    }


def test_transform_countries_skips_rows_without_code_or_name() -> None:
    out = transform_countries(
        [
            _country(code="FR", name="France", flag="🇫🇷", note="x"),
            _country(code="", name="Nowhere"),
            _country(code="XX", name="   "),
        ]
    )
    assert out == {
        "visited": {"FR": {"name": "France", "flag": "🇫🇷", "note": "x"}},
        "visitedCodes": ["FR"],
        "visitedNames": ["France"],
    }


def test_transform_countries_trims_and_uppercases() -> None:
    out = transform_countries([_country(code=" jp ", name=" Japan ", flag=" 🇯🇵 ", note="  Tokyo marathon  ")])
    assert out["visited"] == {"JP": {"name": "Japan", "flag": "🇯🇵", "note": "Tokyo marathon"}}
    assert out["visitedCodes"] == ["JP"]
    assert out["visitedNames"] == ["Japan"]


def test_transform_countries_keeps_upstream_order() -> None:
    out = transform_countries(
        [
            _country(code="AR", name="Argentina"),
            _country(code="BE", name="Belgium"),
            _country(code="CL", name="Chile"),
        ]
    )
    assert out["visitedCodes"] == ["AR", "BE", "CL"]
    assert list(out["visited"].keys()) == ["AR", "BE", "CL"]


def test_transform_countries_duplicate_code_overwrites_map_but_lists_keep_both() -> None:
    out = transform_countries(
        [
            _country(code="GB", name="England", note="first"),
            _country(code="gb", name="United Kingdom", note="second"),
        ]
    )
    assert out["visited"] == {"GB": {"name": "United Kingdom", "flag": "", "note": "second"}}
    assert out["visitedCodes"] == ["GB", "GB"]
    assert out["visitedNames"] == ["England", "United Kingdom"]
    assert len(out["visitedCodes"]) > len(out["visited"])


def test_transform_countries_empty_results() -> None:
    assert transform_countries([]) == {"visited": {}, "visitedCodes": [], "visitedNames": []}


def test_transform_countries_is_idempotent() -> None:
    results = [_country(code="PT", name="Portugal", flag="🇵🇹"), _country(code="ES", name="Spain")]
    first = json.dumps(transform_countries(results), ensure_ascii=False)
    second = json.dumps(transform_countries(results), ensure_ascii=False)
    assert first == second


def test_countries_sorted_by_name_ascending() -> None:
    assert NAME_ASCENDING_SORTS == [{"property": "Name", "direction": "ascending"}]
