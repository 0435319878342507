"""Placeholder substitution for the site's HTML templates.

Templates use ``{name}`` tokens. Substitution is a single regex pass: every
token whose name is known is replaced, anything else stays as written, and
replacement text is never scanned again.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from .settings import RenderContext

TOKEN_RE = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")
LEADING_WS_RE = re.compile(r"^[ \t]+", re.MULTILINE)

TAB_WIDTH = 4


def substitute(template: str, substitutions: Mapping[str, str]) -> str:
    """Replace known ``{name}`` tokens, leaving unknown ones untouched."""
    if not substitutions:
        return template

    def resolve(match: re.Match) -> str:
        value = substitutions.get(match.group(1))
        return match.group(0) if value is None else str(value)

    return TOKEN_RE.sub(resolve, template)


def spaces_to_tabs(text: str, width: int = TAB_WIDTH) -> str:
    """Turn each run of ``width`` indentation spaces into a tab.

    Only the leading whitespace of a line is touched; spaces left over after
    the last full run are kept.
    """
    run = " " * width
    return LEADING_WS_RE.sub(lambda m: m.group(0).replace(run, "\t"), text)


def analytics_substitutions(context: RenderContext, snippet: str) -> dict[str, str]:
    """Tokens for the analytics block.

    With no tracking id configured only ``{googletracking}`` is blanked;
    ``{gtag}`` is expected to appear inside the snippet alone.
    """
    if not context.analytics_enabled:
        return {"googletracking": ""}
    gtag = context.googleanalytics
    return {
        "googletracking": substitute(snippet, {"gtag": gtag}),
        "gtag": gtag,
    }


def render(
    template: str,
    substitutions: Mapping[str, str],
    context: RenderContext,
    analytics_snippet: str = "",
) -> str:
    """Substitute page tokens, resolve analytics, then normalise indentation."""
    tokens = dict(substitutions)
    tokens.update(analytics_substitutions(context, analytics_snippet))
    body = substitute(template, tokens)

    if not context.spaces_instead_of_tabs:
        body = spaces_to_tabs(body)

    return body
