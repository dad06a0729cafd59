"""Custom exceptions for trackbridge.

All exceptions include an HTTP status_code attribute for easy
integration with web frameworks like FastAPI.
"""


class TrackBridgeError(Exception):
    """Base exception for trackbridge.

    Attributes:
        status_code: HTTP status code for API error responses.
    """

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidLinkError(TrackBridgeError):
    """Failed to parse a music link.

    Raised when the URL is empty, belongs to an unsupported host, or lacks
    the path segments needed to identify the content.
    """

    status_code: int = 400  # Bad Request


class ConfigurationError(TrackBridgeError):
    """The converter is wired incorrectly.

    Raised when no source catalog or match selector is registered for a
    platform a link needs. Never retried.
    """

    status_code: int = 500  # Internal Server Error


class CredentialsMissingError(ConfigurationError):
    """Platform credentials are not configured.

    Raised when a token provider cannot produce a bearer credential.
    This is a configuration error and is never retried.
    """

    status_code: int = 500  # Internal Server Error


class MetadataNotFoundError(TrackBridgeError):
    """Source platform lookup returned nothing usable.

    Raised when the catalog lookup for a parsed link yields zero results
    or a result of a different content type.
    """

    status_code: int = 404  # Not Found


class NoMatchFoundError(TrackBridgeError):
    """No acceptable candidate was found on the target platform.

    Raised after every generated query has been tried.

    Attributes:
        platform: Display name of the platform that was searched.
    """

    status_code: int = 404  # Not Found

    def __init__(self, message: str, platform: str | None = None) -> None:
        self.platform = platform
        super().__init__(message)


class ExternalApiError(TrackBridgeError):
    """A platform API call failed.

    Raised for network errors, 4xx/5xx responses and malformed payloads.

    Attributes:
        status: Upstream HTTP status, if a response was received.
    """

    status_code: int = 502  # Bad Gateway (upstream failure)

    def __init__(self, message: str, status: int | None = None) -> None:
        self.status = status
        super().__init__(message)
