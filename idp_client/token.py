"""Access token value object."""
from __future__ import annotations

import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True)
class AccessToken:
    """
    Credential obtained from a token endpoint.

    Instances are immutable. ``expires`` is an absolute UNIX timestamp;
    ``values`` holds every provider-returned field that has no dedicated
    attribute (token_type, scope, id_token, ...).
    """

    access_token: str
    refresh_token: str | None = None
    expires: int | None = None
    uid: str | None = None
    values: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        if not self.access_token:
            raise ValueError("Required option not passed: access_token")
        # Frozen dataclass: bypass __setattr__ to wrap values read-only
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    @property
    def token(self) -> str:
        return self.access_token

    @property
    def expires_in(self) -> int | None:
        """Seconds until expiry, negative once expired, None when unknown."""
        if self.expires is None:
            return None
        return self.expires - int(time.time())

    def has_expired(self, now: float | None = None) -> bool:
        """
        Check whether the token is past its expiry.

        Raises:
            ValueError: No expiry information was returned for this token
        """
        if self.expires is None:
            raise ValueError('"expires" is not set on the token')
        current = time.time() if now is None else now
        return self.expires < current

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the shape a token endpoint returns."""
        data: dict[str, Any] = dict(self.values)
        data["access_token"] = self.access_token
        if self.refresh_token:
            data["refresh_token"] = self.refresh_token
        if self.expires is not None:
            data["expires"] = self.expires
        if self.uid is not None:
            data["uid"] = self.uid
        return data

    def __str__(self) -> str:
        return self.access_token

    def __repr__(self) -> str:
        # Never leak credentials into logs or tracebacks
        return f"AccessToken(expires={self.expires!r}, uid={self.uid!r})"
