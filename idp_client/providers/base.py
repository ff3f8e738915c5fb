"""Abstract base class for OAuth 2.0 providers.

Implements authorization URL construction, grant exchange and user details
retrieval. Subclasses supply the provider-specific endpoints, defaults and
user details mapping.

A provider instance keeps the state generated by the last authorization URL
build. Instances are not meant to be shared between concurrent authorization
flows: create one provider per flow, or store the state elsewhere.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sequence
from typing import Any, Literal
from urllib.parse import urlencode

import httpx
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, ConfigDict, Field

from idp_client.core.config import settings
from idp_client.exceptions import TransportError
from idp_client.grants import AbstractGrant, GrantFactory
from idp_client.http.parser import ErrorPolicy, ResponseParser, extract_oauth_error, has_error_key
from idp_client.http.transport import HttpxTransport, Transport
from idp_client.token import AccessToken
from idp_client.utils.random import RandomGenerator, SecretsRandomGenerator

from .user import UserDetails

logger = logging.getLogger(__name__)

RedirectHandler = Callable[[str, "AbstractProvider"], Any]


class ProviderConfig(BaseModel):
    """Immutable provider settings."""

    model_config = ConfigDict(frozen=True)

    client_id: str
    client_secret: str = ""
    redirect_uri: str = ""
    default_scopes: tuple[str, ...] = ()
    scope_separator: str = ","
    http_method: Literal["GET", "POST"] = "POST"
    response_format: Literal["json", "form"] = "json"
    uid_key: str = Field(default="uid", min_length=1)


class AbstractProvider(ABC):
    """
    Abstract base class for OAuth 2.0 providers.

    Class attributes hold the provider's defaults; constructor arguments
    override them.
    """

    DEFAULT_SCOPES: tuple[str, ...] = ()
    SCOPE_SEPARATOR: str = ","
    HTTP_METHOD: str = "POST"
    RESPONSE_FORMAT: str = "json"
    UID_KEY: str = "uid"

    def __init__(
        self,
        client_id: str,
        client_secret: str = "",
        redirect_uri: str = "",
        *,
        default_scopes: Sequence[str] | None = None,
        scope_separator: str | None = None,
        http_method: str | None = None,
        response_format: str | None = None,
        uid_key: str | None = None,
        grant_factory: GrantFactory | None = None,
        transport: Transport | None = None,
        random_generator: RandomGenerator | None = None,
        redirect_handler: RedirectHandler | None = None,
        state_length: int | None = None,
    ):
        """
        Initialize OAuth provider.

        Args:
            client_id: OAuth client ID from provider
            client_secret: OAuth client secret from provider
            redirect_uri: Callback URL for OAuth flow
            grant_factory: Grant registry (defaults to built-in grants)
            transport: HTTP transport (defaults to HttpxTransport)
            random_generator: State generator (defaults to SecretsRandomGenerator)
            redirect_handler: Callable receiving (url, provider) in authorize()
            state_length: Length of generated state values
        """
        self._config = ProviderConfig(
            client_id=client_id,
            client_secret=client_secret,
            redirect_uri=redirect_uri,
            default_scopes=tuple(self.DEFAULT_SCOPES if default_scopes is None else default_scopes),
            scope_separator=self.SCOPE_SEPARATOR if scope_separator is None else scope_separator,
            http_method=(http_method or self.HTTP_METHOD).upper(),
            response_format=(response_format or self.RESPONSE_FORMAT).lower(),
            uid_key=uid_key or self.UID_KEY,
        )
        self.grant_factory = grant_factory or GrantFactory()
        self.transport = transport or HttpxTransport()
        self.random_generator = random_generator or SecretsRandomGenerator()
        self.redirect_handler = redirect_handler
        self.state_length = state_length or settings.STATE_LENGTH
        self._state: str | None = None

    @property
    def config(self) -> ProviderConfig:
        return self._config

    @property
    def state(self) -> str | None:
        """State generated (or supplied) by the last authorization URL build."""
        return self._state

    # --- Provider-specific details ---

    @property
    @abstractmethod
    def authorization_url(self) -> str:
        """Provider's authorization endpoint."""
        pass

    @property
    @abstractmethod
    def token_url(self) -> str:
        """Provider's token exchange endpoint."""
        pass

    @abstractmethod
    def user_details_url(self, token: AccessToken) -> str:
        """Provider's user info endpoint for ``token``."""
        pass

    @abstractmethod
    def prepare_user_details(self, response: dict[str, Any], token: AccessToken) -> UserDetails:
        """Build the provider's UserDetails from a parsed user info response."""
        pass

    def is_error_response(self, response: Mapping[str, Any]) -> bool:
        return has_error_key(response)

    def extract_error(self, response: Mapping[str, Any]) -> tuple[str, str | None]:
        """Return ``(message, provider_error_code)`` for an error response."""
        return extract_oauth_error(response)

    @property
    def error_policy(self) -> ErrorPolicy:
        return ErrorPolicy(is_error=self.is_error_response, extract=self.extract_error)

    def get_default_headers(self) -> dict[str, str]:
        """Headers sent with every request (Accept, User-Agent, ...)."""
        return {}

    def get_authorization_headers(self, token: AccessToken | str) -> dict[str, str]:
        """
        Headers authenticating a request with ``token``.

        No default is provided; providers override this to activate bearer
        (or MAC) authentication.
        """
        return {}

    def get_headers(self, token: AccessToken | str | None = None) -> dict[str, str]:
        headers = dict(self.get_default_headers())
        if token:
            headers.update(self.get_authorization_headers(token))
        return headers

    # --- Authorization ---

    def get_random_state(self, length: int | None = None) -> str:
        return self.random_generator.generate(length or self.state_length)

    def serialize_scope(self, scope: str | Sequence[str]) -> str:
        if isinstance(scope, str):
            return scope
        return self._config.scope_separator.join(scope)

    def get_authorization_url(self, options: Mapping[str, Any] | None = None) -> str:
        """
        Generate authorization URL for OAuth flow.

        Args:
            options: state, scope, response_type, approval_prompt and any
                extra query parameters for the authorization endpoint

        Returns:
            Full authorization URL with query parameters
        """
        options = dict(options or {})

        state = options.pop("state", None) or self.get_random_state()
        scope = options.pop("scope", None) or self._config.default_scopes
        response_type = options.pop("response_type", None) or "code"
        approval_prompt = options.pop("approval_prompt", None) or "auto"

        # Store the state, the caller validates it on the callback
        self._state = state

        params: dict[str, Any] = {
            "client_id": self._config.client_id,
            "redirect_uri": self._config.redirect_uri,
            "state": state,
            "scope": self.serialize_scope(scope),
            "response_type": response_type,
            "approval_prompt": approval_prompt,
        }
        for key, value in options.items():
            params.setdefault(key, value)

        return self._append_query(self.authorization_url, params)

    def authorize(self, options: Mapping[str, Any] | None = None) -> Any:
        """
        Send the user to the authorization URL.

        Returns:
            The redirect handler's result, or a 302 RedirectResponse when no
            handler is configured
        """
        url = self.get_authorization_url(options)
        if self.redirect_handler is not None:
            return self.redirect_handler(url, self)
        return RedirectResponse(url, status_code=302)

    def set_redirect_handler(self, handler: RedirectHandler) -> None:
        self.redirect_handler = handler

    # --- Token exchange ---

    def get_access_token(
        self,
        grant: str | AbstractGrant = "authorization_code",
        params: Mapping[str, Any] | None = None,
    ) -> AccessToken:
        """
        Exchange a grant for an access token.

        Args:
            grant: Grant name (e.g., "authorization_code") or grant instance
            params: Grant-specific parameters (e.g., {"code": ...}); they
                override the base client parameters

        Returns:
            AccessToken built by the grant

        Raises:
            UnknownGrantError: Grant name not registered
            InvalidGrantError: Grant object does not extend AbstractGrant
            MissingParameterError: Grant parameter missing
            NetworkError: Transport failed without a response
            ResponseFormatError: Body does not decode under the declared format
            IdentityProviderException: Provider reported an error
        """
        if isinstance(grant, str):
            grant = self.grant_factory.get_grant(grant)
        else:
            self.grant_factory.check_grant(grant)

        defaults = {
            "client_id": self._config.client_id,
            "client_secret": self._config.client_secret,
            "redirect_uri": self._config.redirect_uri,
            "grant_type": grant.name,
        }
        request_params = grant.prepare_request_params(defaults, params)

        # Log sanitized exchange metadata (no secrets)
        logger.info(
            "Token exchange attempt | provider=%s grant=%s method=%s client_id=%s",
            type(self).__name__,
            grant.name,
            self._config.http_method,
            self._config.client_id,
            extra={"provider": type(self).__name__, "grant": grant.name, "method": self._config.http_method},
        )

        headers = self.get_headers()
        if self._config.http_method == "GET":
            url = self._append_query(self.token_url, request_params)
            body = None
        else:
            url = self.token_url
            headers["Content-Type"] = "application/x-www-form-urlencoded"
            body = urlencode(request_params)

        raw = self._send(self._config.http_method, url, headers, body)
        result = self.prepare_access_token_result(self.parse_response(raw))
        return grant.handle_response(result)

    def prepare_access_token_result(self, result: Mapping[str, Any]) -> dict[str, Any]:
        """Normalize a token response before the grant handles it."""
        return self.set_result_uid(result)

    def set_result_uid(self, result: Mapping[str, Any]) -> dict[str, Any]:
        """Copy the provider's uid field into "uid", keeping the original key.

        A missing or null uid field leaves "uid" unset.
        """
        normalized = dict(result)
        uid_key = self._config.uid_key
        if uid_key != "uid" and normalized.get(uid_key) is not None:
            normalized["uid"] = normalized[uid_key]
        return normalized

    # --- Authenticated requests ---

    def get_authenticated_request(self, method: str, url: str, token: AccessToken | str) -> httpx.Request:
        """Build a request carrying this provider's headers for ``token``."""
        return httpx.Request(method.upper(), url, headers=self.get_headers(token))

    def get_response(self, request: httpx.Request) -> dict[str, Any]:
        """Send ``request`` and parse the body per the provider response format."""
        raw = self._send(request.method, str(request.url), dict(request.headers), request.content or None)
        return self.parse_response(raw)

    def parse_response(self, raw: bytes | str) -> dict[str, Any]:
        parser = ResponseParser(self._config.response_format, self.error_policy)
        return parser.parse(raw)

    def fetch_user_details(self, token: AccessToken) -> dict[str, Any]:
        url = self.user_details_url(token)
        request = self.get_authenticated_request("GET", url, token)
        return self.get_response(request)

    def get_user_details(self, token: AccessToken) -> UserDetails:
        """
        Fetch user information using an access token.

        Raises:
            NetworkError: Transport failed without a response
            ResponseFormatError: Body does not decode
            IdentityProviderException: Provider reported an error
        """
        response = self.fetch_user_details(token)
        return self.prepare_user_details(response, token)

    # --- Helpers ---

    def _send(self, method: str, url: str, headers: Mapping[str, str], body: bytes | str | None) -> bytes | str:
        """Perform one exchange and return the body, keeping error bodies."""
        try:
            response = self.transport.send(method, url, headers, body)
        except TransportError as e:
            if e.response is None:
                raise
            # Providers report structured errors with non-2xx statuses
            logger.debug(
                "Using error response body | status=%s url=%s",
                e.response.status_code,
                url,
                extra={"status_code": e.response.status_code, "url": url},
            )
            return e.response.body
        return response.body

    @staticmethod
    def _append_query(url: str, params: Mapping[str, Any]) -> str:
        separator = "&" if "?" in url else "?"
        return f"{url}{separator}{urlencode(params, doseq=True)}"
