from .base import AbstractGrant


class Password(AbstractGrant):
    """Resource owner password credentials grant."""

    required_request_params = ("username", "password")

    @property
    def name(self) -> str:
        return "password"
