"""Tests for response decoding and provider error detection."""
import pytest

from idp_client.exceptions import IdentityProviderException, ResponseFormatError
from idp_client.http.parser import ErrorPolicy, ResponseParser, extract_oauth_error


class TestJsonParsing:
    def test_returns_decoded_mapping(self):
        body = b'{"access_token": "T", "expires_in": 3600, "scope": ["a", "b"]}'
        assert ResponseParser("json").parse(body) == {
            "access_token": "T",
            "expires_in": 3600,
            "scope": ["a", "b"],
        }

    def test_accepts_text(self):
        assert ResponseParser("json").parse('{"a": 1}') == {"a": 1}

    @pytest.mark.parametrize("body", [b"", b"{", b"not json", b'{"a": 1'])
    def test_malformed_json_is_fatal(self, body):
        with pytest.raises(ResponseFormatError) as exc_info:
            ResponseParser("json").parse(body)
        assert exc_info.value.response_format == "json"
        assert exc_info.value.code == "RSP001"

    def test_non_object_json_rejected(self):
        with pytest.raises(ResponseFormatError, match="list"):
            ResponseParser("json").parse(b"[1, 2]")

    def test_invalid_utf8_rejected(self):
        with pytest.raises(ResponseFormatError):
            ResponseParser("json").parse(b"\xff\xfe{}")


class TestFormParsing:
    def test_decodes_pairs(self):
        result = ResponseParser("form").parse(b"access_token=T&scope=a+b&empty=")
        assert result == {"access_token": "T", "scope": "a b", "empty": ""}

    def test_empty_body(self):
        assert ResponseParser("form").parse("") == {}

    def test_trailing_separator_ignored(self):
        assert ResponseParser("form").parse("access_token=T&") == {"access_token": "T"}

    def test_empty_segments_ignored(self):
        assert ResponseParser("form").parse("access_token=T&&token_type=bearer") == {
            "access_token": "T",
            "token_type": "bearer",
        }

    def test_bare_key_maps_to_empty_string(self):
        assert ResponseParser("form").parse("access_token=T&flag") == {"access_token": "T", "flag": ""}

    def test_malformed_form_is_fatal(self):
        with pytest.raises(ResponseFormatError):
            ResponseParser("form").parse("this is not a form body")

    def test_unknown_format(self):
        with pytest.raises(ResponseFormatError, match="xml"):
            ResponseParser("xml").parse("<a/>")


class TestErrorDetection:
    def test_flat_error(self):
        with pytest.raises(IdentityProviderException) as exc_info:
            ResponseParser("json").parse(b'{"error": "invalid_grant", "error_description": "Bad code"}')
        exc = exc_info.value
        assert exc.message == "Bad code"
        assert exc.error_code == "invalid_grant"
        assert exc.response["error"] == "invalid_grant"

    def test_error_keeps_raw_body(self):
        body = b'{"error": "invalid_grant",  "error_uri": "https://idp/errors"}'
        with pytest.raises(IdentityProviderException) as exc_info:
            ResponseParser("json").parse(body)
        assert exc_info.value.raw_body == body.decode("utf-8")

    def test_form_error_keeps_raw_body(self):
        with pytest.raises(IdentityProviderException) as exc_info:
            ResponseParser("form").parse("error=access_denied&error_description=Denied")
        assert exc_info.value.raw_body == "error=access_denied&error_description=Denied"
        assert exc_info.value.message == "Denied"

    def test_error_without_description_uses_code(self):
        with pytest.raises(IdentityProviderException, match="invalid_grant"):
            ResponseParser("json").parse(b'{"error": "invalid_grant"}')

    def test_nested_error_object(self):
        body = b'{"error": {"code": 401, "message": "Invalid Credentials", "status": "UNAUTHENTICATED"}}'
        with pytest.raises(IdentityProviderException) as exc_info:
            ResponseParser("json").parse(body)
        assert exc_info.value.message == "Invalid Credentials"
        assert exc_info.value.error_code == "UNAUTHENTICATED"

    def test_empty_error_value_is_not_an_error(self):
        assert ResponseParser("json").parse(b'{"error": "", "a": 1}') == {"error": "", "a": 1}

    def test_custom_policy(self):
        policy = ErrorPolicy(
            is_error=lambda data: data.get("status") == "fail",
            extract=lambda data: (data.get("reason", "failed"), data.get("errcode")),
        )
        parser = ResponseParser("json", policy)

        assert parser.parse(b'{"status": "ok", "error": "ignored"}')["status"] == "ok"
        with pytest.raises(IdentityProviderException) as exc_info:
            parser.parse(b'{"status": "fail", "reason": "quota", "errcode": "E42"}')
        assert exc_info.value.error_code == "E42"

    def test_extract_defaults(self):
        assert extract_oauth_error({"error": "x"}) == ("x", "x")
        assert extract_oauth_error({}) == ("Unknown provider error", None)

    def test_to_dict(self):
        with pytest.raises(IdentityProviderException) as exc_info:
            ResponseParser("json").parse(b'{"error": "access_denied"}')
        assert exc_info.value.to_dict() == {
            "error": {"message": "access_denied", "code": "IDP001", "details": {"error": "access_denied"}}
        }
