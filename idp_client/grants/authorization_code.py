from .base import AbstractGrant


class AuthorizationCode(AbstractGrant):
    """Exchange the code returned to the redirect URI for a token."""

    required_request_params = ("code",)

    @property
    def name(self) -> str:
        return "authorization_code"
