"""Environment-driven settings, read once at process start.

Field names match their environment variables (case-insensitive). An empty
variable counts as unset.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RenderContext(BaseSettings):
    """Toggles that shape every rendered page during one publish run."""

    model_config = SettingsConfigDict(
        case_sensitive=False, env_ignore_empty=True, frozen=True, extra="ignore"
    )

    website: str = ""
    website_title: str = ""
    googleanalytics: str = ""
    home_page_credits_override: str = ""
    hide_home_page_credits: bool = False
    spaces_instead_of_tabs: bool = False
    # named ordering for the home page albums, e.g. "chronological"
    home_page_album_order: str | None = None

    @field_validator("hide_home_page_credits", "spaces_instead_of_tabs", mode="before")
    @classmethod
    def _flag_is_set(cls, value):
        # any non-empty text turns a flag on, "false" and "0" included
        if isinstance(value, str):
            return bool(value)
        return value

    @property
    def analytics_enabled(self) -> bool:
        return bool(self.googleanalytics.strip())


class PublishConfig(BaseSettings):
    """Where the site goes and where its shared snippets come from."""

    model_config = SettingsConfigDict(
        case_sensitive=False, env_ignore_empty=True, frozen=True, extra="ignore"
    )

    site_bucket: str = ""
    shared_snippets_dir: Path = Path("shared/snippets")
    # defaults to the name of the published directory
    site_section: str | None = None
