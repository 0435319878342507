"""Builders for the two templated pages of the home section."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from . import album
from .album import Gallery
from .errors import LengthMismatchError
from .settings import RenderContext
from .templating import analytics_substitutions, render, substitute

DEFAULT_CREDITS = '<a href="https://html5up.net">Design: HTML5 UP</a>'


@dataclass(frozen=True)
class Snippets:
    """Snippet templates shared by every page of a publish run."""

    analytics: str = ""
    album: str = ""
    back_to: str = ""


def build_error_page(raw: str, context: RenderContext, analytics_snippet: str = "") -> str:
    return render(raw, {"website": context.website}, context, analytics_snippet)


def back_link(context: RenderContext, title: str | None) -> str | None:
    """Pick what goes in the back-to block, or None for no block at all.

    A titled page links home; the home page itself shows the credits override,
    the default credits, or nothing when credits are hidden.
    """
    if title:
        return f'<a href="/">Back to {context.website_title}</a>'
    if context.home_page_credits_override:
        return context.home_page_credits_override
    if not context.hide_home_page_credits:
        return DEFAULT_CREDITS
    return None


def build_home_page(
    raw: str,
    albums: Sequence[str],
    pictures: Sequence[Sequence[str]],
    metadata: Sequence[Mapping[str, Any]],
    album_markup: str,
    back_to: str,
    context: RenderContext,
    analytics_snippet: str = "",
    title: str | None = None,
) -> str:
    """Render the album listing page.

    Raises LengthMismatchError when the three album sequences are not
    parallel.
    """
    if not len(albums) == len(pictures) == len(metadata):
        raise LengthMismatchError(len(albums), len(pictures), len(metadata))

    # the inserted blocks are not scanned again, so resolve analytics in them first
    analytics = analytics_substitutions(context, analytics_snippet)

    views = album.zip_views(albums, pictures, metadata)
    pictures_html = album.compose(views, title or context.home_page_album_order, album_markup)
    pictures_html = substitute(pictures_html, analytics)

    link = back_link(context, title)
    back_to_html = "" if link is None else substitute(back_to, {"backLink": link, **analytics})

    return render(
        raw,
        {
            "website": context.website,
            "title": title or context.website_title,
            "pictures": pictures_html,
            "backTo": back_to_html,
        },
        context,
        analytics_snippet,
    )


# ---------------------------------------------------------------------------
# Dispatch by file name
# ---------------------------------------------------------------------------

PageBuilder = Callable[[str, Gallery, Snippets, RenderContext], str]


def _error_page(raw: str, gallery: Gallery, snippets: Snippets, context: RenderContext) -> str:
    return build_error_page(raw, context, snippets.analytics)


def _home_page(raw: str, gallery: Gallery, snippets: Snippets, context: RenderContext) -> str:
    return build_home_page(
        raw,
        gallery.albums,
        gallery.pictures,
        gallery.metadata,
        snippets.album,
        snippets.back_to,
        context,
        snippets.analytics,
    )


PAGE_BUILDERS: dict[str, PageBuilder] = {
    "error.html": _error_page,
    "index.html": _home_page,
}


def get_page_builder(filename: str) -> PageBuilder | None:
    """Builder for a file name; None means the file is copied as-is."""
    return PAGE_BUILDERS.get(filename)
