"""Unit tests for OAuth1Signer.

Covers:
- percent_encode (RFC 3986 compliance, round trip)
- build_signature_base_string (sorting, encoding)
- sign (golden GET/PUT vectors, determinism, parameter order independence)
- Authorization header content (OAuth params + realm only)
- final URL construction
- unsupported signature methods

Uses table-driven @dataclass cases wherever possible.
"""

import base64
import hashlib
import hmac
from dataclasses import dataclass
from urllib.parse import unquote

import pytest

from cardmarket.adapters.entropy.fake import FixedClock, FixedNonceSource
from cardmarket.core.exceptions import SigningError
from cardmarket.domains.oauth.signer import OAuth1Signer, percent_encode
from cardmarket.domains.oauth.types import Credentials, OAuthSettings

HOST = "https://api.cardmarket.com/ws/v2.0/output.json"
EXPANSIONS_URL = f"{HOST}/expansions"

# Computed once from the fixed inputs in conftest (nonce "0.5", timestamp 1700000000000)
GOLDEN_GET_SIGNATURE = "gS4Av6dH+Xj7EYApDKABBN4Kow8="
GOLDEN_PUT_SIGNATURE = "VBaV1nRp54lSV0HIZVxCqWHhZLg="

OAUTH_HEADER_KEYS = {
    "oauth_consumer_key",
    "oauth_nonce",
    "oauth_signature",
    "oauth_signature_method",
    "oauth_timestamp",
    "oauth_token",
    "oauth_version",
    "realm",
}


def _parse_header(header: str) -> dict:
    pairs = {}
    for part in header.split(", "):
        key, _, value = part.partition("=")
        pairs[key] = value.strip('"')
    return pairs


# ===========================================================================
# percent_encode: RFC 3986 (table-driven)
# ===========================================================================


@dataclass
class PercentEncodeCase:
    desc: str
    input_val: str
    expected: str


PERCENT_ENCODE_CASES = [
    PercentEncodeCase("plain ascii", "abc", "abc"),
    PercentEncodeCase("unreserved punctuation", "a-b.c_d~e", "a-b.c_d~e"),
    PercentEncodeCase("space", "hello world", "hello%20world"),
    PercentEncodeCase("plus sign", "a+b", "a%2Bb"),
    PercentEncodeCase("asterisk", "a*b", "a%2Ab"),
    PercentEncodeCase("slash and colon", "https://x/y", "https%3A%2F%2Fx%2Fy"),
    PercentEncodeCase("ampersand and equals", "a=1&b=2", "a%3D1%26b%3D2"),
    PercentEncodeCase("unicode", "naïve", "na%C3%AFve"),
    PercentEncodeCase("empty string", "", ""),
]


@pytest.mark.parametrize("case", PERCENT_ENCODE_CASES, ids=lambda c: c.desc)
def test_percent_encode(case: PercentEncodeCase):
    assert percent_encode(case.input_val) == case.expected


@pytest.mark.parametrize(
    "value", ["Black Lotus", "Æther Revolt", "a/b?c=d&e", "100%", "~*+!'()"]
)
def test_percent_encode_round_trips(value: str):
    assert unquote(percent_encode(value)) == value


# ===========================================================================
# build_signature_base_string
# ===========================================================================


def test_base_string_uppercases_method_and_sorts_params():
    base = OAuth1Signer.build_signature_base_string(
        "get", "https://example.com/a b", {"z": "1", "a": "x y"}
    )
    method, url, params = base.split("&")
    assert method == "GET"
    assert url == "https%3A%2F%2Fexample.com%2Fa%20b"
    # values are encoded once, then the joined string once more
    assert params == percent_encode("a=x%20y&z=1")


def test_base_string_for_golden_get():
    params = {
        "idGame": "1",
        "oauth_consumer_key": "app-token",
        "oauth_token": "access-token",
        "oauth_nonce": "0.5",
        "oauth_timestamp": "1700000000000",
        "oauth_signature_method": "HMAC-SHA1",
        "oauth_version": "1.0",
    }
    assert OAuth1Signer.build_signature_base_string("GET", EXPANSIONS_URL, params) == (
        "GET&https%3A%2F%2Fapi.cardmarket.com%2Fws%2Fv2.0%2Foutput.json%2Fexpansions"
        "&idGame%3D1%26oauth_consumer_key%3Dapp-token%26oauth_nonce%3D0.5"
        "%26oauth_signature_method%3DHMAC-SHA1%26oauth_timestamp%3D1700000000000"
        "%26oauth_token%3Daccess-token%26oauth_version%3D1.0"
    )


def test_sign_base_string_matches_hmac_sha1(signer, credentials):
    base = "GET&https%3A%2F%2Fexample.com&p%3D1"
    key = b"app-secret&access-secret"
    expected = base64.b64encode(hmac.new(key, base.encode(), hashlib.sha1).digest()).decode()
    assert signer.sign_base_string(base, credentials) == expected


def test_signing_key_encodes_secrets(fixed_nonces, fixed_clock):
    creds = Credentials("ck", "sec&ret", "tok", "tok/sec")
    signer = OAuth1Signer(OAuthSettings(), nonce_source=fixed_nonces, clock=fixed_clock)
    base = "GET&x&y"
    key = b"sec%26ret&tok%2Fsec"
    expected = base64.b64encode(hmac.new(key, base.encode(), hashlib.sha1).digest()).decode()
    assert signer.sign_base_string(base, creds) == expected


# ===========================================================================
# sign: golden vectors
# ===========================================================================


def test_sign_golden_get(signer, credentials):
    signed = signer.sign("GET", EXPANSIONS_URL, {"idGame": "1"}, credentials)

    assert signed.url == f"{EXPANSIONS_URL}?idGame=1"
    assert signed.authorization == (
        'oauth_consumer_key="app-token", '
        'oauth_nonce="0.5", '
        f'oauth_signature="{GOLDEN_GET_SIGNATURE}", '
        'oauth_signature_method="HMAC-SHA1", '
        'oauth_timestamp="1700000000000", '
        'oauth_token="access-token", '
        'oauth_version="1.0", '
        f'realm="{EXPANSIONS_URL}"'
    )


def test_sign_golden_put_without_query(signer, credentials):
    url = f"{HOST}/stock"
    signed = signer.sign("PUT", url, {}, credentials)

    assert signed.url == url
    header = _parse_header(signed.authorization)
    assert header["oauth_signature"] == GOLDEN_PUT_SIGNATURE
    assert header["realm"] == url
    # no body hash: the body never takes part in signing
    assert "oauth_body_hash" not in header


def test_sign_is_deterministic_for_fixed_nonce_and_timestamp(signer, credentials):
    first = signer.sign("GET", EXPANSIONS_URL, {"idGame": "1", "a": "b"}, credentials)
    second = signer.sign("GET", EXPANSIONS_URL, {"idGame": "1", "a": "b"}, credentials)
    assert first == second


def test_sign_ignores_query_insertion_order(signer, credentials):
    forward = signer.sign("GET", EXPANSIONS_URL, {"a": "1", "m": "2", "z": "3"}, credentials)
    backward = signer.sign("GET", EXPANSIONS_URL, {"z": "3", "m": "2", "a": "1"}, credentials)
    assert forward == backward
    assert forward.url == f"{EXPANSIONS_URL}?a=1&m=2&z=3"


@dataclass
class VaryingCase:
    desc: str
    nonces: list
    timestamps: tuple


VARYING_CASES = [
    VaryingCase("different nonce", ["0.5", "0.25"], (1700000000000, 1700000000000)),
    VaryingCase("different timestamp", ["0.5", "0.5"], (1700000000000, 1700000000001)),
]


@pytest.mark.parametrize("case", VARYING_CASES, ids=lambda c: c.desc)
def test_nonce_or_timestamp_changes_only_signature(case: VaryingCase, credentials):
    nonces = FixedNonceSource(case.nonces)
    clock = FixedClock(case.timestamps[0])
    signer = OAuth1Signer(OAuthSettings(), nonce_source=nonces, clock=clock)

    first = signer.sign("GET", EXPANSIONS_URL, {"idGame": "1"}, credentials)
    clock.value = case.timestamps[1]
    second = signer.sign("GET", EXPANSIONS_URL, {"idGame": "1"}, credentials)
    first, second = _parse_header(first.authorization), _parse_header(second.authorization)

    assert first["oauth_signature"] != second["oauth_signature"]
    assert set(first) == set(second) == OAUTH_HEADER_KEYS


def test_header_never_contains_query_params(signer, credentials):
    signed = signer.sign("GET", EXPANSIONS_URL, {"idGame": "1", "start": "0"}, credentials)
    header = _parse_header(signed.authorization)
    assert set(header) == OAUTH_HEADER_KEYS
    assert "idGame" not in signed.authorization


def test_query_string_is_appended_without_escaping(signer, credentials):
    signed = signer.sign("GET", f"{HOST}/products/find", {"search": "Black Lotus"}, credentials)
    assert signed.url == f"{HOST}/products/find?search=Black Lotus"


def test_nonce_is_fresh_per_call(fixed_clock, credentials):
    nonces = FixedNonceSource(["n1", "n2", "n3"])
    signer = OAuth1Signer(OAuthSettings(), nonce_source=nonces, clock=fixed_clock)
    for _ in range(3):
        signer.sign("GET", EXPANSIONS_URL, {}, credentials)
    assert nonces.issued == ["n1", "n2", "n3"]


def test_default_nonce_source_is_random(credentials):
    signer = OAuth1Signer(OAuthSettings())
    nonces = {
        _parse_header(signer.sign("GET", EXPANSIONS_URL, {}, credentials).authorization)[
            "oauth_nonce"
        ]
        for _ in range(50)
    }
    assert len(nonces) == 50


# ===========================================================================
# Signing failures
# ===========================================================================


@pytest.mark.parametrize("method", ["PLAINTEXT", "RSA-SHA1", "HMAC-MD5"])
def test_unsupported_signature_method_is_fatal(method: str):
    with pytest.raises(SigningError, match="Unsupported signature method"):
        OAuth1Signer(OAuthSettings(signature_method=method))


def test_hmac_sha256_is_supported(fixed_nonces, fixed_clock, credentials):
    signer = OAuth1Signer(
        OAuthSettings(signature_method="HMAC-SHA256"), nonce_source=fixed_nonces, clock=fixed_clock
    )
    header = _parse_header(signer.sign("GET", EXPANSIONS_URL, {}, credentials).authorization)
    assert header["oauth_signature_method"] == "HMAC-SHA256"
    # sha256 digest is 32 bytes -> 44 base64 chars
    assert len(header["oauth_signature"]) == 44


def test_url_with_query_string_is_rejected(signer, credentials):
    with pytest.raises(SigningError):
        signer.sign("GET", f"{EXPANSIONS_URL}?idGame=1", {}, credentials)
