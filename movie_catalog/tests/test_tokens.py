"""
Test cases for token encoding and signing.
"""
import base64

import jwt
import pytest

from movie_catalog.auth import tokens

SECRET = "unit-test-secret"


@pytest.mark.parametrize("payload", [
    {"username": "user", "sub": 1, "iat": 1700000000, "exp": 1700604800},
    {"nested": {"list": [1, 2.5, None, True]}, "text": "café ☃"},
    {"k": "x"},
    {"k": "xy"},
    [],
    42,
    "abc",
    "123",
    "null",
    "",
])
def test_encode_decode_round_trip(payload):
    encoded = tokens.encode(payload)
    assert "=" not in encoded
    assert "+" not in encoded and "/" not in encoded
    assert tokens.decode(encoded) == payload


def test_encode_uses_compact_json():
    assert tokens.decode(tokens.encode({"a": 1})) == {"a": 1}
    assert tokens.encode({"alg": "HS256", "typ": "JWT"}) == "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9"


def test_encode_quotes_strings():
    assert tokens.encode("{}") != tokens.encode({})
    assert tokens.decode(tokens.encode("{}")) == "{}"


def test_decode_rejects_garbage():
    with pytest.raises(tokens.TokenError):
        tokens.decode("!!!")
    not_json = base64.urlsafe_b64encode(b"not json").decode("ascii").rstrip("=")
    with pytest.raises(tokens.TokenError):
        tokens.decode(not_json)


def test_sign_is_deterministic():
    first = tokens.sign("header.payload", SECRET)
    assert first == tokens.sign("header.payload", SECRET)
    assert first != tokens.sign("header.payload", "other-secret")
    assert first != tokens.sign("header.payload2", SECRET)
    # 32-byte digest, base64url without padding
    assert len(first) == 43
    assert "=" not in first


def test_signatures_match():
    sig = tokens.sign("x.y", SECRET)
    assert tokens.signatures_match(sig, sig)
    assert not tokens.signatures_match(sig, sig[:-1] + ("A" if sig[-1] != "A" else "B"))


def test_split():
    assert tokens.split("a.b.c") == ("a", "b", "c")
    for bad in ("", "a.b", "a.b.c.d"):
        with pytest.raises(tokens.TokenError):
            tokens.split(bad)


def test_issued_token_is_readable_by_pyjwt():
    payload = {"username": "user", "sub": 1}
    token = tokens.issue(payload, SECRET)
    assert jwt.get_unverified_header(token) == {"alg": "HS256", "typ": "JWT"}
    assert jwt.decode(token, SECRET, algorithms=["HS256"], options={"verify_sub": False}) == payload
    with pytest.raises(jwt.InvalidSignatureError):
        jwt.decode(token, "wrong", algorithms=["HS256"])
