"""Platform API clients.

Public API:
    SpotifyClient - Spotify Web API (search and lookup)
    AppleMusicClient - Apple Music catalog API (search)
    ITunesLookupClient - Public iTunes lookup (Apple Music source metadata)
    SpotifyClientCredentials / AppleMusicDeveloperToken - Token providers
"""

from trackbridge.clients.apple_music import AppleMusicClient
from trackbridge.clients.credentials import (
    AppleMusicDeveloperToken,
    SpotifyClientCredentials,
)
from trackbridge.clients.itunes import ITunesLookupClient
from trackbridge.clients.protocols import SearchCatalog, SourceCatalog, TokenProvider
from trackbridge.clients.spotify import SpotifyClient

__all__ = [
    "AppleMusicClient",
    "AppleMusicDeveloperToken",
    "ITunesLookupClient",
    "SearchCatalog",
    "SourceCatalog",
    "SpotifyClient",
    "SpotifyClientCredentials",
    "TokenProvider",
]
