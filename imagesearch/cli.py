"""Command-line interface for imagesearch.

Usage:
    imagesearch search "mountain lake" --limit 10
    imagesearch search "mountain lake" --colour blue --licence creative_commons
    imagesearch urls "mountain lake" --limit 5 -o text
    imagesearch download "mountain lake" --limit 20 --dir ./lakes
"""

import argparse
import asyncio
import json
import logging
import sys

from imagesearch.config import settings
from imagesearch.exceptions import ExtractionFormatError, ImageSearchError
from imagesearch.services.filters import FILTERS, resolve_filters

EXIT_ERROR = 1
EXIT_FORMAT_CHANGED = 2


def _setup_logging(verbose: bool = False):
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _filter_tokens(args) -> list[str]:
    return resolve_filters(**{name: getattr(args, name) for name in FILTERS})


async def _cmd_search(args):
    """Print image records."""
    from imagesearch.services.google_images import search_images

    images = await search_images(args.query, args.limit, _filter_tokens(args))

    if args.output == "json":
        print(json.dumps([image.model_dump() for image in images], indent=2, ensure_ascii=False))
    else:
        for i, image in enumerate(images, start=1):
            print(f"{i:>3}  {image.asset_url}")
            print(f"     {image.source_host}  {image.source_url}")

    print(f"\nFound {len(images)} images", file=sys.stderr)


async def _cmd_urls(args):
    """Print image URLs only."""
    from imagesearch.services.google_images import image_urls

    urls = await image_urls(args.query, args.limit, _filter_tokens(args))

    if args.output == "json":
        print(json.dumps(urls, indent=2, ensure_ascii=False))
    else:
        for url in urls:
            print(url)


async def _cmd_download(args):
    """Download images and report the shortfall."""
    from imagesearch.services.google_images import download_images

    result = await download_images(args.query, args.limit, args.dir, _filter_tokens(args))

    if args.output == "json":
        print(json.dumps(
            {"paths": [str(p) for p in result.paths], "missing": result.missing},
            indent=2,
            ensure_ascii=False,
        ))
    else:
        for path in result.paths:
            print(path)

    print(
        f"\nDownloaded {len(result.paths)} images, {result.missing} missing",
        file=sys.stderr,
    )


def _add_filter_arguments(parser: argparse.ArgumentParser):
    group = parser.add_argument_group("filters")
    for name, table in FILTERS.items():
        group.add_argument(
            f"--{name.replace('_', '-')}",
            dest=name,
            default=None,
            choices=list(table),
            help=f"{name.replace('_', ' ').capitalize()} filter",
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="imagesearch",
        description="imagesearch CLI - search and download Google Images results",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "-o", "--output", default="json",
        choices=["json", "text"],
        help="Output format (default: json)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # --- search ---
    search_parser = subparsers.add_parser("search", help="Print image records for a query")
    search_parser.add_argument("query", help="Search query")
    search_parser.add_argument("--limit", type=int, default=0, help="Max images (0 = all)")
    _add_filter_arguments(search_parser)

    # --- urls ---
    urls_parser = subparsers.add_parser("urls", help="Print image URLs for a query")
    urls_parser.add_argument("query", help="Search query")
    urls_parser.add_argument("--limit", type=int, default=0, help="Max images (0 = all)")
    _add_filter_arguments(urls_parser)

    # --- download ---
    download_parser = subparsers.add_parser("download", help="Download images for a query")
    download_parser.add_argument("query", help="Search query")
    download_parser.add_argument("--limit", type=int, default=10, help="Images to download (0 = all)")
    download_parser.add_argument(
        "--dir", default=settings.DOWNLOAD_DIR,
        help=f"Destination directory (default: {settings.DOWNLOAD_DIR})",
    )
    _add_filter_arguments(download_parser)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_ERROR

    if args.limit < 0:
        parser.error("--limit must be >= 0")

    _setup_logging(args.verbose)

    commands = {
        "search": _cmd_search,
        "urls": _cmd_urls,
        "download": _cmd_download,
    }

    try:
        asyncio.run(commands[args.command](args))
    except ExtractionFormatError as e:
        print(
            f"[ERROR] Google changed the results page structure ({e.phase} phase): {e}",
            file=sys.stderr,
        )
        return EXIT_FORMAT_CHANGED
    except ImageSearchError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return EXIT_ERROR
    return 0


if __name__ == "__main__":
    sys.exit(main())
