"""Walk a site section, render its pages and upload everything to a bucket."""

from __future__ import annotations

import asyncio
import logging
import mimetypes
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any

from .album import Gallery
from .errors import SnippetError, WalkError
from .pages import Snippets, get_page_builder
from .settings import PublishConfig, RenderContext

logger = logging.getLogger(__name__)

HOME_SECTION = "homepage"
SNIPPETS_DIR = "snippets"
ASSETS_DIR = "assets"
DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class FileTask:
    source: Path
    relative: PurePosixPath
    key: str
    content_type: str


@dataclass
class PublishReport:
    """What happened to each file of a run."""

    uploaded: list[str] = field(default_factory=list)
    failed: dict[str, BaseException] = field(default_factory=dict)
    first_error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.first_error is None

    def record_failure(self, key: str, exc: BaseException) -> None:
        self.failed[key] = exc
        # set once: later failures never replace the first one
        if self.first_error is None:
            self.first_error = exc


# ---------------------------------------------------------------------------
# Files and keys
# ---------------------------------------------------------------------------

def walk(root: Path) -> list[Path]:
    """Every file below ``root``, in a stable order."""
    if not root.is_dir():
        raise WalkError(f"Cannot walk {root}: not a directory")
    try:
        return sorted(p for p in root.rglob("*") if p.is_file())
    except OSError as e:
        raise WalkError(f"Cannot walk {root}: {e}") from e


def is_snippet(relative: PurePosixPath) -> bool:
    return SNIPPETS_DIR in relative.parts[:-1]


def destination_key(relative: PurePosixPath, section: str) -> str:
    """Object key for a file; assets get namespaced by section.

    ``assets/img/1.jpg`` in the home section becomes
    ``assets/homepage/img/1.jpg``.
    """
    parts = []
    for part in relative.parts[:-1]:
        parts.append(part)
        if part == ASSETS_DIR:
            parts.append(section)
    parts.append(relative.name)
    return "/".join(parts)


def content_type(path: Path) -> str:
    ctype, _ = mimetypes.guess_type(path.name)
    return ctype or DEFAULT_CONTENT_TYPE


def plan_tasks(root: Path, files: Sequence[Path], section: str) -> list[FileTask]:
    tasks = []
    for f in files:
        relative = PurePosixPath(f.relative_to(root).as_posix())
        if is_snippet(relative):
            continue
        tasks.append(
            FileTask(
                source=f,
                relative=relative,
                key=destination_key(relative, section),
                content_type=content_type(f),
            )
        )
    return tasks


def _read_snippet(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise SnippetError(f"Cannot read snippet {path}: {e}") from e


def load_snippets(root: Path, shared_dir: Path) -> Snippets:
    return Snippets(
        analytics=_read_snippet(shared_dir / "ga.html"),
        album=_read_snippet(root / SNIPPETS_DIR / "album.html"),
        back_to=_read_snippet(root / SNIPPETS_DIR / "backto.html"),
    )


# ---------------------------------------------------------------------------
# Upload
# ---------------------------------------------------------------------------

def render_body(task: FileTask, raw: bytes, gallery: Gallery, snippets: Snippets,
                context: RenderContext) -> bytes:
    builder = get_page_builder(task.source.name)
    if builder is None:
        return raw
    text = raw.decode("utf-8", errors="replace")
    return builder(text, gallery, snippets, context).encode("utf-8")


async def _publish_file(task, gallery, snippets, context, client, bucket, report):
    try:
        raw = await asyncio.to_thread(task.source.read_bytes)
        body = render_body(task, raw, gallery, snippets, context)
        await asyncio.to_thread(
            client.put_object,
            Bucket=bucket,
            Key=task.key,
            Body=body,
            ContentType=task.content_type,
        )
    except Exception as e:
        logger.debug("Failed %s -> %s: %s", task.relative, task.key, e)
        report.record_failure(task.key, e)
        return
    logger.debug("Uploaded %s -> %s (%s)", task.relative, task.key, task.content_type)
    report.uploaded.append(task.key)


async def publish(
    root_dir: Path | str,
    albums: Sequence[str],
    pictures: Sequence[Sequence[str]],
    metadata: Sequence[Mapping[str, Any]],
    *,
    client,
    config: PublishConfig | None = None,
    context: RenderContext | None = None,
) -> PublishReport:
    """Render and upload every file of a site section.

    All files are uploaded concurrently. A file that fails to render or upload
    does not stop the others; once every upload has settled the first failure
    is logged. Only a directory that cannot be walked, or a missing snippet,
    raises.
    """
    root = Path(root_dir)
    config = config or PublishConfig()
    context = context or RenderContext()

    files = walk(root)
    snippets = load_snippets(root, config.shared_snippets_dir)
    section = config.site_section or root.resolve().name
    gallery = Gallery(albums, pictures, metadata)

    tasks = plan_tasks(root, files, section)
    logger.info("Publishing %d file(s) from %s to bucket %r", len(tasks), root, config.site_bucket)

    report = PublishReport()
    await asyncio.gather(*(
        _publish_file(task, gallery, snippets, context, client, config.site_bucket, report)
        for task in tasks
    ))

    if report.first_error is not None:
        logger.error(
            "Publish of %s failed for %d of %d file(s): %s",
            root,
            len(report.failed),
            len(tasks),
            report.first_error,
            exc_info=report.first_error,
        )
    else:
        logger.info("Published %d file(s)", len(report.uploaded))
    return report


def publish_home_page(
    gallery: Gallery,
    root_dir: Path | str = HOME_SECTION,
    *,
    client=None,
    config: PublishConfig | None = None,
    context: RenderContext | None = None,
) -> PublishReport:
    """Blocking entry point: publish the home section with environment settings."""
    if client is None:
        from .storage import make_s3_client

        client = make_s3_client()
    return asyncio.run(
        publish(
            root_dir,
            gallery.albums,
            gallery.pictures,
            gallery.metadata,
            client=client,
            config=config,
            context=context,
        )
    )
