"""Shared fixtures: a small home section on disk and a fake S3 client."""

from __future__ import annotations

import threading
from pathlib import Path

import pytest
from botocore.exceptions import ClientError

from sitebuilder.settings import PublishConfig, RenderContext

ENV_VARS = (
    "WEBSITE",
    "WEBSITE_TITLE",
    "GOOGLEANALYTICS",
    "HOME_PAGE_CREDITS_OVERRIDE",
    "HIDE_HOME_PAGE_CREDITS",
    "SPACES_INSTEAD_OF_TABS",
    "HOME_PAGE_ALBUM_ORDER",
    "SITE_BUCKET",
    "SHARED_SNIPPETS_DIR",
    "SITE_SECTION",
)

INDEX_HTML = """\
<html>
<head>
    <title>{title}</title>
    {googletracking}
</head>
<body>
    <h1>{website}</h1>
    {pictures}
    {backTo}
</body>
</html>
"""

ERROR_HTML = """\
<h1>{website}</h1>
    <p>Not found</p>
"""

ALBUM_HTML = '<article><a href="{albumLink}"><img src="{albumThumbnail}"></a><h2>{albumTitle}</h2></article>\n'
BACKTO_HTML = '<p class="back">{backLink}</p>'
GA_HTML = '<script src="https://www.googletagmanager.com/gtag/js?id={gtag}"></script>'


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def site(tmp_path: Path) -> Path:
    """A home section with pages, assets and snippets."""
    root = tmp_path / "homepage"
    (root / "snippets").mkdir(parents=True)
    (root / "assets" / "css").mkdir(parents=True)
    (root / "assets" / "img").mkdir(parents=True)

    (root / "index.html").write_text(INDEX_HTML)
    (root / "error.html").write_text(ERROR_HTML)
    (root / "snippets" / "album.html").write_text(ALBUM_HTML)
    (root / "snippets" / "backto.html").write_text(BACKTO_HTML)
    (root / "assets" / "css" / "main.css").write_text("body { margin: 0; }\n")
    (root / "assets" / "img" / "1.jpg").write_bytes(b"\xff\xd8\xff\xe0 not really a jpeg")

    shared = tmp_path / "shared" / "snippets"
    shared.mkdir(parents=True)
    (shared / "ga.html").write_text(GA_HTML)
    return root


@pytest.fixture
def config(site: Path) -> PublishConfig:
    return PublishConfig(
        site_bucket="gallery-bucket",
        shared_snippets_dir=site.parent / "shared" / "snippets",
    )


@pytest.fixture
def context() -> RenderContext:
    return RenderContext(website="Photos", website_title="My Photos")


class FakeS3:
    """Records put_object calls; raises ClientError for keys in ``fail_keys``."""

    def __init__(self, fail_keys=()):
        self.fail_keys = set(fail_keys)
        self.objects: dict[str, dict] = {}
        self.attempts: list[str] = []
        self._lock = threading.Lock()

    def put_object(self, *, Bucket, Key, Body, ContentType):
        with self._lock:
            self.attempts.append(Key)
        if Key in self.fail_keys:
            raise ClientError(
                {"Error": {"Code": "InternalError", "Message": "boom"}}, "PutObject"
            )
        with self._lock:
            self.objects[Key] = {"Bucket": Bucket, "Body": Body, "ContentType": ContentType}
        return {"ETag": '"0"'}


@pytest.fixture
def s3() -> FakeS3:
    return FakeS3()


@pytest.fixture
def failing_s3():
    """Factory for a fake client that fails on the given keys."""
    return lambda *keys: FakeS3(fail_keys=keys)
