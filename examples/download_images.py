"""Bulk download example - save N images and report the shortfall."""

import asyncio

from imagesearch import download_images


async def main():
    result = await download_images("red panda", limit=25, directory="./red-panda")

    for path in result.paths:
        print(path)
    if result.missing:
        print(f"{result.missing} of 25 images could not be downloaded")


asyncio.run(main())
