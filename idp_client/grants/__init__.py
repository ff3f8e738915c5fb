"""OAuth 2.0 grant strategies."""
from .authorization_code import AuthorizationCode
from .base import AbstractGrant
from .client_credentials import ClientCredentials
from .factory import GrantFactory
from .password import Password
from .refresh_token import RefreshToken

__all__ = [
    "AbstractGrant",
    "AuthorizationCode",
    "ClientCredentials",
    "GrantFactory",
    "Password",
    "RefreshToken",
]
