"""Exceptions raised while rendering and publishing the site."""


class SiteBuilderError(Exception):
    """Base class for sitebuilder errors."""


class WalkError(SiteBuilderError):
    """The source directory could not be enumerated."""


class LengthMismatchError(SiteBuilderError, ValueError):
    """Albums, pictures and metadata were not parallel sequences."""

    def __init__(self, albums: int, pictures: int, metadata: int):
        super().__init__(
            f"albums, pictures and metadata differ in length "
            f"({albums}, {pictures}, {metadata})"
        )
        self.lengths = (albums, pictures, metadata)


class SnippetError(SiteBuilderError):
    """A shared snippet template could not be read."""
