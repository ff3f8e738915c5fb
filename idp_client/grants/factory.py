"""Grant registry resolving grant_type names to grant strategies."""
from __future__ import annotations

import logging
from typing import Any

from idp_client.exceptions import InvalidGrantError, UnknownGrantError

from .authorization_code import AuthorizationCode
from .base import AbstractGrant
from .client_credentials import ClientCredentials
from .password import Password
from .refresh_token import RefreshToken

logger = logging.getLogger(__name__)

DEFAULT_GRANTS: dict[str, type[AbstractGrant]] = {
    "authorization_code": AuthorizationCode,
    "client_credentials": ClientCredentials,
    "password": Password,
    "refresh_token": RefreshToken,
}


class GrantFactory:
    """
    Registry of grant strategies keyed by grant_type name.

    Built-in grants are registered on construction; custom grants are added
    with register_grant. Unknown names fail closed.
    """

    def __init__(self):
        self._registry: dict[str, type[AbstractGrant]] = dict(DEFAULT_GRANTS)

    def register_grant(self, name: str, grant_cls: type[AbstractGrant]) -> GrantFactory:
        """
        Register (or replace) a grant class.

        Args:
            name: grant_type identifier (e.g., "urn:ietf:params:oauth:grant-type:jwt-bearer")
            grant_cls: AbstractGrant subclass

        Raises:
            InvalidGrantError: If grant_cls does not extend AbstractGrant
        """
        if not (isinstance(grant_cls, type) and issubclass(grant_cls, AbstractGrant)):
            raise InvalidGrantError(grant_cls)
        self._registry[name] = grant_cls
        logger.debug("Registered grant: %s -> %s", name, grant_cls.__name__)
        return self

    def get_grant(self, name: str) -> AbstractGrant:
        """
        Instantiate the grant registered under ``name``.

        Raises:
            UnknownGrantError: If no grant is registered under that name
        """
        if name not in self._registry:
            raise UnknownGrantError(name)
        return self._registry[name]()

    @staticmethod
    def is_grant(grant: Any) -> bool:
        return isinstance(grant, AbstractGrant)

    def check_grant(self, grant: Any) -> None:
        """
        Raises:
            InvalidGrantError: If ``grant`` is not an AbstractGrant instance
        """
        if not self.is_grant(grant):
            raise InvalidGrantError(grant)

    def registered(self) -> list[str]:
        return sorted(self._registry)
