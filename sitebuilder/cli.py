"""
sitebuilder: render the gallery home page and publish it.

Usage:
    sitebuilder --gallery gallery.json            # upload to $SITE_BUCKET
    sitebuilder --gallery gallery.json -o public_html

Reads the home section from ./homepage/ and the shared analytics snippet from
./shared/snippets/ unless told otherwise.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .album import Gallery
from .errors import SiteBuilderError
from .publish import HOME_SECTION, publish_home_page
from .settings import PublishConfig, RenderContext
from .storage import LocalDirectoryStore


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="sitebuilder", description=__doc__.split("\n")[1])
    parser.add_argument("--root", type=Path, default=Path(HOME_SECTION),
                        help="section directory to publish (default: homepage)")
    parser.add_argument("--gallery", type=Path,
                        help="JSON file with albums, pictures and metadata")
    parser.add_argument("--shared", type=Path,
                        help="directory holding ga.html (default: shared/snippets)")
    parser.add_argument("-o", "--output", type=Path,
                        help="write the site here instead of uploading it")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    context = RenderContext()
    config = PublishConfig()
    if args.shared:
        config = config.model_copy(update={"shared_snippets_dir": args.shared})

    print("Step 1: Loading gallery...")
    gallery = Gallery.from_json(args.gallery) if args.gallery else Gallery()
    print(f"  {len(gallery.albums)} albums")

    print("Step 2: Publishing...")
    if args.output:
        client = LocalDirectoryStore(args.output)
        target = f"{args.output}/"
    elif config.site_bucket:
        client = None
        target = f"s3://{config.site_bucket}/"
    else:
        raise SystemExit("SITE_BUCKET is not set; pass --output to build locally")

    try:
        report = publish_home_page(
            gallery, args.root, client=client, config=config, context=context
        )
    except SiteBuilderError as e:
        raise SystemExit(str(e))

    print(f"\nDone! {len(report.uploaded)} file(s) written to {target}")
    if report.failed:
        print(f"  {len(report.failed)} file(s) failed, see log above")


if __name__ == "__main__":
    main()
