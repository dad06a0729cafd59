"""Artwork URL utilities."""

import re

ARTWORK_SIZE = 600

_APPLE_TEMPLATE = re.compile(r"\{w\}x\{h\}")
_ITUNES_SIZE = re.compile(r"\d+x\d+bb")


def fill_artwork_template(url: str, size: int = ARTWORK_SIZE) -> str:
    """Fill the ``{w}x{h}`` placeholder of an Apple Music catalog artwork URL.

    Args:
        url: Artwork URL template from the catalog API.
        size: Desired width and height in pixels.

    Returns:
        URL requesting a square image of the given size.
    """
    return _APPLE_TEMPLATE.sub(f"{size}x{size}", url)


def upscale_itunes_artwork(url: str, size: int = ARTWORK_SIZE) -> str:
    """Replace the size token of an iTunes artwork URL to request a larger image.

    The iTunes lookup API returns small thumbnails such as
    ``.../100x100bb.jpg``; the same image is served at other sizes by
    rewriting the ``<w>x<h>bb`` token.

    Args:
        url: Artwork URL (may or may not contain a size token).
        size: Desired width and height in pixels.

    Returns:
        URL with the updated size token, or the original URL if none was found.
    """
    return _ITUNES_SIZE.sub(f"{size}x{size}bb", url)
