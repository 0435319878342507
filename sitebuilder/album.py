"""Album markup for the home page.

An album is a folder name, its pictures are object keys and its metadata is
whatever was parsed from the album's metadata file. The three arrive as
parallel sequences and are zipped into ``AlbumView`` objects per render.
"""

from __future__ import annotations

import datetime as dt
import json
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import quote

from markupsafe import escape

from .templating import substitute

THUMBNAIL_PREFIX = "pics/resized/360x225/"


@dataclass(frozen=True)
class AlbumView:
    album: str
    pictures: Sequence[str] = ()
    metadata: Mapping[str, Any] = field(default_factory=dict)

    @property
    def title(self) -> str:
        return str(self.metadata.get("title") or self.album.rstrip("/"))

    @property
    def cover(self) -> str | None:
        cover = self.metadata.get("cover")
        if cover:
            return str(cover)
        return self.pictures[0] if self.pictures else None

    @property
    def date(self) -> dt.date | None:
        return _parse_date(self.metadata.get("date"))

    @property
    def weight(self) -> float | None:
        value = self.metadata.get("order")
        try:
            return None if value is None else float(value)
        except (TypeError, ValueError):
            return None


def _parse_date(value) -> dt.date | None:
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return dt.date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


# ---------------------------------------------------------------------------
# Ordering strategies
# ---------------------------------------------------------------------------

# Each key puts albums missing the sort field after the ones that have it.

def _by_date(view: AlbumView):
    date = view.date
    return (date is None, date or dt.date.min)


def _by_date_desc(view: AlbumView):
    date = view.date
    return (date is None, -(date.toordinal()) if date else 0)


def _by_weight(view: AlbumView):
    weight = view.weight
    return (weight is None, weight if weight is not None else 0.0)


def _by_title(view: AlbumView):
    return view.title.casefold()


SORTERS: dict[str, Callable[[AlbumView], Any]] = {
    "chronological": _by_date,
    "reverse-chronological": _by_date_desc,
    "custom": _by_weight,
    "weight": _by_weight,
    "alphabetical": _by_title,
}


def get_album_sorter(order_key: str | None) -> Callable[[AlbumView], Any] | None:
    """Look up the sort key for a page, or None to keep the given order."""
    if not order_key:
        return None
    return SORTERS.get(order_key.strip().lower())


# ---------------------------------------------------------------------------
# Markup
# ---------------------------------------------------------------------------

def zip_views(
    albums: Sequence[str],
    pictures: Sequence[Sequence[str]],
    metadata: Sequence[Mapping[str, Any] | None],
) -> list[AlbumView]:
    return [
        AlbumView(album, tuple(pics or ()), meta or {})
        for album, pics, meta in zip(albums, pictures, metadata)
    ]


def get_album_markup(view: AlbumView, markup: str) -> str:
    """Fill the album snippet for a single album."""
    cover = view.cover
    date = view.date
    return substitute(
        markup,
        {
            "albumTitle": str(escape(view.title)),
            "albumLink": quote(view.album.rstrip("/")) + "/",
            "albumThumbnail": THUMBNAIL_PREFIX + quote(cover) if cover else "",
            "albumComment": str(view.metadata.get("comment") or ""),
            "albumDate": date.isoformat() if date else "",
            "pictureCount": str(len(view.pictures)),
        },
    )


def compose(views: Sequence[AlbumView], order_key: str | None, markup: str) -> str:
    """Render every album through ``markup`` and join them in order."""
    sorter = get_album_sorter(order_key)
    if sorter:
        views = sorted(views, key=sorter)
    return "".join(get_album_markup(view, markup) for view in views)


@dataclass(frozen=True)
class Gallery:
    """The parsed album listing a publish run works from."""

    albums: Sequence[str] = ()
    pictures: Sequence[Sequence[str]] = ()
    metadata: Sequence[Mapping[str, Any]] = ()

    @classmethod
    def from_json(cls, path: Path) -> Gallery:
        """Load ``{"albums": [...], "pictures": [[...]], "metadata": [{...}]}``."""
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        albums = data.get("albums", [])
        return cls(
            albums=albums,
            pictures=data.get("pictures", [[] for _ in albums]),
            metadata=data.get("metadata", [{} for _ in albums]),
        )
