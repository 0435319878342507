"""sitebuilder: render the gallery home page and publish it to a bucket."""

import logging

from .errors import LengthMismatchError, SiteBuilderError, SnippetError, WalkError
from .settings import PublishConfig, RenderContext

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "LengthMismatchError",
    "PublishConfig",
    "RenderContext",
    "SiteBuilderError",
    "SnippetError",
    "WalkError",
]
