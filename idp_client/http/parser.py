"""Response decoding and provider error detection."""
from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qsl

from idp_client.exceptions import IdentityProviderException, ResponseFormatError

JSON = "json"
FORM = "form"


@dataclass(frozen=True)
class ErrorPolicy:
    """Predicate + extractor pair deciding whether a decoded body is an error.

    ``extract`` returns ``(message, provider_error_code)``.
    """

    is_error: Callable[[Mapping[str, Any]], bool]
    extract: Callable[[Mapping[str, Any]], tuple[str, str | None]]


def has_error_key(data: Mapping[str, Any]) -> bool:
    return bool(data.get("error"))


def extract_oauth_error(data: Mapping[str, Any]) -> tuple[str, str | None]:
    """Pull message and code out of an RFC 6749 style error body.

    Handles both the flat form (``error`` / ``error_description``) and the
    nested object some APIs return (``{"error": {"message": ..., "status": ...}}``).
    """
    error = data.get("error")
    if isinstance(error, Mapping):
        code = error.get("status") or error.get("code")
        message = error.get("message") or str(code or "Unknown provider error")
        return str(message), str(code) if code is not None else None

    code = str(error) if error is not None else None
    message = data.get("error_description") or code or "Unknown provider error"
    return str(message), code


default_error_policy = ErrorPolicy(is_error=has_error_key, extract=extract_oauth_error)


class ResponseParser:
    """Decode raw bodies per the declared format and surface provider errors."""

    def __init__(self, response_format: str = JSON, error_policy: ErrorPolicy = default_error_policy):
        self.response_format = response_format
        self.error_policy = error_policy

    def parse(self, raw_body: bytes | str) -> dict[str, Any]:
        """
        Decode a response body.

        Returns:
            Decoded mapping, never one representing an error state

        Raises:
            ResponseFormatError: Body does not decode under the declared format
            IdentityProviderException: Body carries a provider-declared error
        """
        text = self._to_text(raw_body)

        if self.response_format == JSON:
            result = self._decode_json(text)
        elif self.response_format == FORM:
            result = self._decode_form(text)
        else:
            raise ResponseFormatError(
                f"Unsupported response format '{self.response_format}'",
                response_format=self.response_format,
            )

        self.check(result, raw_body=text)
        return result

    def check(self, data: Mapping[str, Any], raw_body: str | None = None) -> None:
        """Raise IdentityProviderException when the policy flags ``data``."""
        if self.error_policy.is_error(data):
            message, error_code = self.error_policy.extract(data)
            raise IdentityProviderException(
                message,
                error_code=error_code,
                response=dict(data),
                raw_body=raw_body,
            )

    def _to_text(self, raw_body: bytes | str) -> str:
        if isinstance(raw_body, str):
            return raw_body
        try:
            return raw_body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ResponseFormatError(
                "Unable to parse client response: body is not valid UTF-8",
                response_format=self.response_format,
            ) from e

    @staticmethod
    def _decode_json(text: str) -> dict[str, Any]:
        try:
            result = json.loads(text)
        except ValueError as e:
            raise ResponseFormatError("Unable to parse client response", response_format=JSON) from e
        if not isinstance(result, dict):
            raise ResponseFormatError(
                f"Expected a JSON object, got {type(result).__name__}",
                response_format=JSON,
            )
        return result

    @staticmethod
    def _decode_form(text: str) -> dict[str, Any]:
        body = text.strip()
        if not body:
            return {}
        # Empty segments are skipped and bare keys map to ""
        if "=" not in body:
            raise ResponseFormatError("Unable to parse client response", response_format=FORM)
        return dict(parse_qsl(body, keep_blank_values=True))
