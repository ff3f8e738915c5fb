"""Google OAuth 2.0 / OpenID Connect implementation."""
from __future__ import annotations

from typing import Any

from idp_client.token import AccessToken

from .base import AbstractProvider
from .user import UserDetails


class GoogleUser(UserDetails):
    """
    User data from Google user info response.

    Expected fields:
    - id: Stable Google account id
    - email: User's email address
    - name: Full name
    - picture: Profile picture URL
    - verified_email: Email verification status
    """

    def __init__(self, response: dict[str, Any]):
        self.response = response
        self.id = response.get("id") or response.get("sub")
        self.email = response.get("email", "")
        self.name = response.get("name", "")
        self.picture = response.get("picture", "")
        self.email_verified = bool(response.get("verified_email", response.get("email_verified", False)))

    def get_id(self) -> str | None:
        return str(self.id) if self.id is not None else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.get_id(),
            "email": self.email,
            "name": self.name,
            "picture": self.picture,
            "email_verified": self.email_verified,
        }


class GoogleProvider(AbstractProvider):
    """Google OAuth 2.0 / OpenID Connect implementation."""

    # Minimal scopes for authentication per Google best practices
    # Request additional scopes (e.g., profile) incrementally when needed
    DEFAULT_SCOPES = ("openid", "email")
    SCOPE_SEPARATOR = " "

    @property
    def authorization_url(self) -> str:
        return "https://accounts.google.com/o/oauth2/v2/auth"

    @property
    def token_url(self) -> str:
        return "https://oauth2.googleapis.com/token"

    def user_details_url(self, token: AccessToken) -> str:
        return "https://www.googleapis.com/oauth2/v2/userinfo"

    def get_default_headers(self) -> dict[str, str]:
        return {"Accept": "application/json"}

    def get_authorization_headers(self, token: AccessToken | str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    def prepare_user_details(self, response: dict[str, Any], token: AccessToken) -> GoogleUser:
        return GoogleUser(response)
