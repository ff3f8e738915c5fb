"""OAuth providers module."""
from .base import AbstractProvider, ProviderConfig
from .generic import GenericProvider
from .google import GoogleProvider, GoogleUser
from .user import GenericUser, UserDetails

__all__ = [
    "AbstractProvider",
    "GenericProvider",
    "GenericUser",
    "GoogleProvider",
    "GoogleUser",
    "ProviderConfig",
    "UserDetails",
]
