"""Provider whose endpoints and field mappings come from configuration."""
from __future__ import annotations

from typing import Any

from idp_client.token import AccessToken

from .base import AbstractProvider
from .user import GenericUser


class GenericProvider(AbstractProvider):
    """
    OAuth 2.0 provider configured entirely at construction time.

    Suits any standards-compliant server without writing a subclass.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str = "",
        redirect_uri: str = "",
        *,
        url_authorize: str,
        url_access_token: str,
        url_user_details: str,
        resource_owner_id_key: str = "id",
        bearer: bool = True,
        **kwargs: Any,
    ):
        """
        Initialize generic provider.

        Args:
            url_authorize: Authorization endpoint
            url_access_token: Token endpoint
            url_user_details: User info endpoint
            resource_owner_id_key: User info field holding the user id
            bearer: Send ``Authorization: Bearer`` with authenticated requests
            **kwargs: Passed to AbstractProvider (scopes, collaborators, ...)
        """
        self._url_authorize = url_authorize
        self._url_access_token = url_access_token
        self._url_user_details = url_user_details
        self.resource_owner_id_key = resource_owner_id_key
        self.bearer = bearer
        super().__init__(client_id, client_secret, redirect_uri, **kwargs)

    @property
    def authorization_url(self) -> str:
        return self._url_authorize

    @property
    def token_url(self) -> str:
        return self._url_access_token

    def user_details_url(self, token: AccessToken) -> str:
        return self._url_user_details

    def get_authorization_headers(self, token: AccessToken | str) -> dict[str, str]:
        if not self.bearer:
            return {}
        return {"Authorization": f"Bearer {token}"}

    def prepare_user_details(self, response: dict[str, Any], token: AccessToken) -> GenericUser:
        return GenericUser(response, id_key=self.resource_owner_id_key)
