"""Credential providers for the platform APIs.

Both providers cache their token and refresh it shortly before expiry.
Refreshes are single-flight: concurrent callers wait on one lock and reuse
the token obtained by whichever caller refreshed first.
"""

import asyncio
import logging
import time
from collections.abc import Callable

import httpx
import jwt

from trackbridge.clients.base import request_json
from trackbridge.exceptions import CredentialsMissingError, ExternalApiError

logger = logging.getLogger(__name__)

SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"

# Refresh this many seconds before the reported expiry
_EXPIRY_MARGIN_SECONDS = 60
_APPLE_TOKEN_LIFETIME_SECONDS = 24 * 60 * 60

# Token endpoint answers to wrong client credentials (invalid_client)
_REJECTED_CREDENTIAL_STATUSES = frozenset(
    {httpx.codes.BAD_REQUEST, httpx.codes.UNAUTHORIZED}
)


class _CachedToken:
    """Token cache guarded by an asyncio lock."""

    def __init__(self, clock: Callable[[], float]) -> None:
        self._clock = clock
        self._lock = asyncio.Lock()
        self._token: str | None = None
        self._expires_at = 0.0

    def _current(self) -> str | None:
        if self._token and self._clock() < self._expires_at - _EXPIRY_MARGIN_SECONDS:
            return self._token
        return None

    def _store(self, token: str, lifetime: float) -> str:
        self._token = token
        self._expires_at = self._clock() + lifetime
        return token

    def invalidate(self) -> None:
        """Drop the cached token so the next call refreshes."""
        self._token = None
        self._expires_at = 0.0


class SpotifyClientCredentials(_CachedToken):
    """Spotify access token from the client-credentials flow."""

    def __init__(
        self,
        client_id: str | None,
        client_secret: str | None,
        http: httpx.AsyncClient,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(clock)
        self._client_id = client_id
        self._client_secret = client_secret
        self._http = http

    async def get_token(self) -> str:
        """Return a cached access token, requesting a new one when needed.

        Raises:
            CredentialsMissingError: If the client id or secret is not set,
                or the token endpoint rejects them.
            ExternalApiError: If the token endpoint fails otherwise.
        """
        if not self._client_id or not self._client_secret:
            raise CredentialsMissingError("Spotify client credentials are not set")

        if token := self._current():
            return token

        async with self._lock:
            if token := self._current():
                return token

            logger.debug("Requesting Spotify access token")
            try:
                data = await request_json(
                    self._http,
                    "POST",
                    SPOTIFY_TOKEN_URL,
                    service="Spotify",
                    data={"grant_type": "client_credentials"},
                    auth=(self._client_id, self._client_secret),
                )
            except ExternalApiError as e:
                if e.status in _REJECTED_CREDENTIAL_STATUSES:
                    raise CredentialsMissingError(
                        "Spotify rejected the configured client credentials"
                    ) from e
                raise
            access_token = data.get("access_token") if isinstance(data, dict) else None
            if not access_token:
                raise ExternalApiError("Spotify token response has no access_token")
            return self._store(access_token, float(data.get("expires_in", 3600)))


class AppleMusicDeveloperToken(_CachedToken):
    """Apple Music developer token signed locally with ES256."""

    def __init__(
        self,
        team_id: str | None,
        key_id: str | None,
        private_key: str | None,
        lifetime: int = _APPLE_TOKEN_LIFETIME_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(clock)
        self._team_id = team_id
        self._key_id = key_id
        self._private_key = private_key
        self._lifetime = lifetime

    async def get_token(self) -> str:
        """Return a cached developer token, signing a new one when needed.

        Raises:
            CredentialsMissingError: If the team id, key id or private key is
                not set, or the key cannot be used for signing.
        """
        if not self._team_id or not self._key_id or not self._private_key:
            raise CredentialsMissingError("Apple Music API credentials are not set")

        if token := self._current():
            return token

        async with self._lock:
            if token := self._current():
                return token

            logger.debug("Signing Apple Music developer token")
            issued_at = int(time.time())
            claims = {
                "iss": self._team_id,
                "iat": issued_at,
                "exp": issued_at + self._lifetime,
            }
            try:
                token = jwt.encode(
                    claims,
                    self._private_key,
                    algorithm="ES256",
                    headers={"kid": self._key_id},
                )
            except (ValueError, TypeError, jwt.PyJWTError) as e:
                raise CredentialsMissingError(
                    f"Apple Music private key is unusable: {e}"
                ) from e
            return self._store(token, self._lifetime)
