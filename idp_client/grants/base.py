"""Abstract base class for OAuth 2.0 grants.

A grant knows how to build the token request body from the provider's base
parameters plus caller parameters, and how to turn a parsed token response
into an AccessToken. Subclasses declare their name and required parameters.
"""
from __future__ import annotations

import time
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from idp_client.exceptions import MissingParameterError, ResponseFormatError
from idp_client.token import AccessToken

# Keys consumed into dedicated AccessToken attributes
TOKEN_KEYS = ("access_token", "refresh_token", "expires", "expires_in", "uid")


class AbstractGrant(ABC):
    """Strategy for obtaining an access token."""

    required_request_params: tuple[str, ...] = ()

    @property
    @abstractmethod
    def name(self) -> str:
        """Canonical grant_type value sent to the token endpoint."""
        pass

    def prepare_request_params(
        self,
        defaults: Mapping[str, Any],
        params: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Merge base parameters with caller parameters.

        Caller values win on key collision, except grant_type which always
        names this grant.

        Raises:
            MissingParameterError: A required parameter is missing or empty
        """
        request_params = {**defaults, **(params or {})}
        request_params["grant_type"] = self.name

        for param in self.required_request_params:
            if request_params.get(param) in (None, ""):
                raise MissingParameterError(self.name, param)

        return request_params

    def handle_response(self, response: Mapping[str, Any]) -> AccessToken:
        """
        Build an AccessToken from a parsed, error-free token response.

        ``expires_in`` (relative seconds) takes precedence over ``expires``
        (absolute timestamp).

        Raises:
            ResponseFormatError: Response has no access_token or a non-numeric expiry
        """
        access_token = response.get("access_token")
        if not access_token:
            raise ResponseFormatError("Token response did not contain an access_token")

        expires = None
        try:
            if response.get("expires_in") not in (None, ""):
                expires = int(time.time()) + int(response["expires_in"])
            elif response.get("expires") not in (None, ""):
                expires = int(response["expires"])
        except (TypeError, ValueError) as e:
            raise ResponseFormatError("Token response carries a non-numeric expiry") from e

        uid = response.get("uid")
        return AccessToken(
            access_token=str(access_token),
            refresh_token=response.get("refresh_token") or None,
            expires=expires,
            uid=str(uid) if uid is not None else None,
            values={k: v for k, v in response.items() if k not in TOKEN_KEYS},
        )

    def __str__(self) -> str:
        return self.name
