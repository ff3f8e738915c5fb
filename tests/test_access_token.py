"""Tests for the AccessToken value object."""
import dataclasses
import time

import pytest

from idp_client.token import AccessToken


def test_requires_access_token():
    with pytest.raises(ValueError, match="access_token"):
        AccessToken(access_token="")


def test_is_immutable():
    token = AccessToken(access_token="T", values={"scope": "a"})
    with pytest.raises(dataclasses.FrozenInstanceError):
        token.access_token = "other"
    with pytest.raises(TypeError):
        token.values["scope"] = "b"


def test_values_copied_from_input():
    values = {"scope": "a"}
    token = AccessToken(access_token="T", values=values)
    values["scope"] = "b"
    assert token.values["scope"] == "a"


def test_str_is_token():
    token = AccessToken(access_token="T")
    assert str(token) == "T"
    assert token.token == "T"


def test_repr_hides_credentials():
    token = AccessToken(access_token="secret-token", refresh_token="secret-refresh")
    assert "secret" not in repr(token)


def test_has_expired():
    token = AccessToken(access_token="T", expires=1000)
    assert token.has_expired(now=1001)
    assert not token.has_expired(now=999)


def test_has_expired_against_clock():
    assert not AccessToken(access_token="T", expires=int(time.time()) + 60).has_expired()
    assert AccessToken(access_token="T", expires=int(time.time()) - 60).has_expired()


def test_has_expired_without_expiry():
    with pytest.raises(ValueError, match="expires"):
        AccessToken(access_token="T").has_expired()


def test_expires_in():
    assert AccessToken(access_token="T").expires_in is None
    remaining = AccessToken(access_token="T", expires=int(time.time()) + 120).expires_in
    assert 118 <= remaining <= 120


def test_to_dict():
    token = AccessToken(
        access_token="T",
        refresh_token="R",
        expires=1893456000,
        uid="u1",
        values={"token_type": "Bearer"},
    )
    assert token.to_dict() == {
        "access_token": "T",
        "refresh_token": "R",
        "expires": 1893456000,
        "uid": "u1",
        "token_type": "Bearer",
    }


def test_to_dict_omits_unset_fields():
    assert AccessToken(access_token="T").to_dict() == {"access_token": "T"}


def test_equality():
    assert AccessToken(access_token="T", values={"a": 1}) == AccessToken(access_token="T", values={"a": 1})
