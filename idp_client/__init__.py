"""OAuth 2.0 client.

Builds authorization URLs, exchanges grants for access tokens and fetches
user details from identity providers.

Providers:
- GenericProvider (endpoints from configuration)
- Google (OAuth 2.0 + OpenID Connect)
"""
from .core.logger import enable_logging
from .exceptions import (
    GrantError,
    IdentityProviderException,
    InvalidGrantError,
    MissingParameterError,
    NetworkError,
    OAuthClientError,
    ResponseFormatError,
    TransportError,
    UnknownGrantError,
)
from .factory import create_providers, get_provider
from .grants import (
    AbstractGrant,
    AuthorizationCode,
    ClientCredentials,
    GrantFactory,
    Password,
    RefreshToken,
)
from .providers import (
    AbstractProvider,
    GenericProvider,
    GoogleProvider,
    ProviderConfig,
    UserDetails,
)
from .token import AccessToken

__all__ = [
    # Exceptions
    "OAuthClientError",
    "GrantError",
    "UnknownGrantError",
    "InvalidGrantError",
    "MissingParameterError",
    "ResponseFormatError",
    "IdentityProviderException",
    "NetworkError",
    "TransportError",
    # Grants
    "AbstractGrant",
    "AuthorizationCode",
    "ClientCredentials",
    "Password",
    "RefreshToken",
    "GrantFactory",
    # Providers
    "AbstractProvider",
    "GenericProvider",
    "GoogleProvider",
    "ProviderConfig",
    "UserDetails",
    # Token
    "AccessToken",
    # Factory
    "create_providers",
    "get_provider",
    # Logging
    "enable_logging",
]
