"""Utility functions for trackbridge.

Available via `from trackbridge.utils import ...` for power users.
Not re-exported at the top-level `trackbridge` package.
"""

from trackbridge.utils.artwork import fill_artwork_template, upscale_itunes_artwork
from trackbridge.utils.url import (
    detect_platform,
    is_supported_url,
    parse_link,
)

__all__ = [
    "detect_platform",
    "fill_artwork_template",
    "is_supported_url",
    "parse_link",
    "upscale_itunes_artwork",
]
