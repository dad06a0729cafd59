"""Data models for trackbridge.

Public API:
    ContentMetadata - Tagged union of track, album and artist metadata
    ParsedLink - Identifiers extracted from a platform URL
    ConversionResult - Outcome of a conversion
    Platform / ContentType / ConversionDirection - Enumerations
"""

from trackbridge.models.enums import ContentType, ConversionDirection, Platform
from trackbridge.models.link import ParsedLink
from trackbridge.models.metadata import (
    AlbumMetadata,
    ArtistMetadata,
    ContentMetadata,
    TrackMetadata,
)
from trackbridge.models.results import ConversionResult, ScoredCandidate

__all__ = [
    "AlbumMetadata",
    "ArtistMetadata",
    "ContentMetadata",
    "ContentType",
    "ConversionDirection",
    "ConversionResult",
    "ParsedLink",
    "Platform",
    "ScoredCandidate",
    "TrackMetadata",
]
