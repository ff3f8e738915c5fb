"""Resource owner (user details) models returned by providers."""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any


class UserDetails(ABC):
    """User profile built from a provider's user-info response."""

    @abstractmethod
    def get_id(self) -> str | None:
        """Provider-normalized unique identifier of the user."""
        pass

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        pass


class GenericUser(UserDetails):
    """Wraps the raw user-info response; the id is read from ``id_key``."""

    def __init__(self, response: Mapping[str, Any], id_key: str = "id"):
        self.response = dict(response)
        self.id_key = id_key

    def get_id(self) -> str | None:
        value = self.response.get(self.id_key)
        return str(value) if value is not None else None

    def to_dict(self) -> dict[str, Any]:
        return dict(self.response)
