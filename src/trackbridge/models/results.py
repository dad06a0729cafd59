"""Matching and conversion result models."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

from trackbridge.models.enums import ConversionDirection
from trackbridge.models.metadata import ContentMetadata, MetadataBase


@dataclass(frozen=True)
class ScoredCandidate:
    """A search result scored against the source metadata.

    Only lives for the duration of one selection.

    Attributes:
        candidate: Metadata of the search result.
        raw_score: Text similarity signal from the scorer.
        boosted_score: Raw score adjusted for originality and popularity.
        external_url: Link to the candidate on the target platform.
        is_original_artist: Whether the candidate is credited to the source artist.
    """

    candidate: MetadataBase
    raw_score: float
    boosted_score: float
    external_url: str
    is_original_artist: bool = False


class ConversionResult(BaseModel):
    """Outcome of converting one link.

    The caller owns persistence (e.g. client-side history).

    Attributes:
        direction: Which way the link was converted.
        source_metadata: Metadata of the original item.
        matched_url: Link to the matched item on the target platform.
        matched_metadata: Metadata of the matched item.
        confidence: User-facing confidence score (0-100).
    """

    model_config = ConfigDict(frozen=True)

    direction: ConversionDirection
    source_metadata: ContentMetadata
    matched_url: str
    matched_metadata: ContentMetadata
    confidence: int = Field(ge=0, le=100)
