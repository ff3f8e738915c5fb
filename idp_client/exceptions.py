"""OAuth2 client exception hierarchy.

Every failure raised by the client derives from OAuthClientError so callers
can catch the whole family in one place.

Error codes follow pattern: [CATEGORY][NUMBER]
- GRT: Grant resolution / request preparation errors
- RSP: Response decoding errors
- IDP: Errors reported by the identity provider
- NET: Transport errors
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from idp_client.http.transport import HttpResponse


class OAuthClientError(Exception):
    """Base exception for all OAuth2 client errors."""

    def __init__(
        self,
        message: str,
        code: str,
        details: dict[str, Any] | None = None,
    ):
        """Initialize exception with message and metadata.

        Args:
            message: Human readable error message
            code: Unique error code (e.g., "GRT001")
            details: Optional additional context
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a serializable payload."""
        return {
            "error": {
                "message": self.message,
                "code": self.code,
                "details": self.details,
            }
        }


# ============================================================================
# GRANT ERRORS (GRT001-099)
# ============================================================================

class GrantError(OAuthClientError):
    """Base class for grant-related errors."""
    pass


class UnknownGrantError(GrantError):
    """Requested grant name is not registered."""

    def __init__(self, name: str):
        super().__init__(
            message=f"Grant '{name}' is not registered",
            code="GRT001",
            details={"grant": name},
        )
        self.grant = name


class InvalidGrantError(GrantError):
    """Object supplied as a grant does not implement the grant interface."""

    def __init__(self, grant: Any):
        type_name = grant.__name__ if isinstance(grant, type) else type(grant).__name__
        super().__init__(
            message=f"{type_name} is not a valid grant; grants must extend AbstractGrant",
            code="GRT002",
            details={"type": type_name},
        )


class MissingParameterError(GrantError):
    """Token request is missing a parameter the grant requires."""

    def __init__(self, grant: str, parameter: str):
        super().__init__(
            message=f"Missing required parameter '{parameter}' for grant '{grant}'",
            code="GRT003",
            details={"grant": grant, "parameter": parameter},
        )
        self.parameter = parameter


# ============================================================================
# RESPONSE ERRORS (RSP001-099)
# ============================================================================

class ResponseFormatError(OAuthClientError):
    """Response body could not be decoded under the declared format."""

    def __init__(self, message: str, response_format: str | None = None):
        super().__init__(
            message=message,
            code="RSP001",
            details={"format": response_format} if response_format else {},
        )
        self.response_format = response_format


# ============================================================================
# IDENTITY PROVIDER ERRORS (IDP001-099)
# ============================================================================

class IdentityProviderException(OAuthClientError):
    """The identity provider explicitly reported an error.

    ``error_code`` holds the provider's own code (e.g. "invalid_grant"),
    ``response`` the decoded body it was extracted from and ``raw_body`` the
    body text as received, for logging or provider-specific inspection.
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        response: dict[str, Any] | None = None,
        raw_body: str | None = None,
    ):
        super().__init__(
            message=message,
            code="IDP001",
            details={"error": error_code} if error_code else {},
        )
        self.error_code = error_code
        self.response = response if response is not None else {}
        self.raw_body = raw_body


# ============================================================================
# NETWORK ERRORS (NET001-099)
# ============================================================================

class NetworkError(OAuthClientError):
    """Transport failed without producing a usable response body."""

    def __init__(self, message: str, code: str = "NET001", details: dict[str, Any] | None = None):
        super().__init__(message=message, code=code, details=details)


class TransportError(NetworkError):
    """Transport reported a failed exchange.

    When the server answered (e.g. with a non-2xx status) the answer is kept
    in ``response`` so structured provider errors can still be parsed.
    """

    def __init__(self, message: str, response: HttpResponse | None = None):
        super().__init__(
            message=message,
            code="NET002",
            details={"status_code": response.status_code} if response is not None else {},
        )
        self.response = response
