from .base import AbstractGrant


class RefreshToken(AbstractGrant):
    """Trade a refresh token for a fresh access token."""

    required_request_params = ("refresh_token",)

    @property
    def name(self) -> str:
        return "refresh_token"
