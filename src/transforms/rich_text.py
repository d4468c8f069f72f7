from __future__ import annotations

from typing import Any, Iterable

from pydantic import BaseModel, ValidationError


class PayloadShapeError(ValueError):
    """Upstream JSON parsed fine but does not have the shape the transforms expect."""


class AnnotationsIn(BaseModel):
    bold: bool = False
    italic: bool = False


class RichTextIn(BaseModel):
    plain_text: str | None = None
    annotations: AnnotationsIn | None = None
    href: str | None = None


def _fragments(rich_text: Iterable[Any] | None) -> list[RichTextIn]:
    if not rich_text:
        return []
    try:
        return [RichTextIn.model_validate(item) for item in rich_text]
    except ValidationError as e:
        raise PayloadShapeError(f"invalid rich_text fragment: {e.error_count()} error(s)") from e


def rich_text_to_plain(rich_text: Iterable[Any] | None) -> str:
    """Concatenate the plain text of every fragment, ignoring styling."""
    return "".join(f.plain_text or "" for f in _fragments(rich_text))


def rich_text_to_html(rich_text: Iterable[Any] | None) -> str:
    """
    Flatten fragments into an HTML-annotated string.

    Wrapping order per fragment: <strong>, then <em> around it, then <a href>
    around both. Text and href are NOT escaped; consumers must not treat the
    result as trusted markup.
    """
    out: list[str] = []
    for f in _fragments(rich_text):
        s = f.plain_text or ""
        ann = f.annotations
        if ann is not None and ann.bold:
            s = f"<strong>{s}</strong>"
        if ann is not None and ann.italic:
            s = f"<em>{s}</em>"
        if f.href:
            s = f'<a href="{f.href}">{s}</a>'
        out.append(s)
    return "".join(out)
