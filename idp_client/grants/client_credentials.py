from .base import AbstractGrant


class ClientCredentials(AbstractGrant):
    @property
    def name(self) -> str:
        return "client_credentials"
