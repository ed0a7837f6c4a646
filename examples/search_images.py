"""Search example - print image records for a query with filters."""

import asyncio

from imagesearch import ExtractionFormatError, resolve_filters, search_images


async def main():
    tokens = resolve_filters(colour="blue", licence="creative_commons", aspect_ratio="wide")

    try:
        images = await search_images("mountain lake", limit=10, filter_tokens=tokens)
    except ExtractionFormatError as e:
        # Google moved the embedded data; nothing to retry
        print(f"Results page changed ({e.phase}): {e}")
        return

    for image in images:
        print(f"{image.source_host:<30} {image.asset_url}")


asyncio.run(main())
