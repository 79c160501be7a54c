"""Tests for bearer token issuance and verification."""

import time

import jwt
import pytest

from training_log_api.auth import TokenService
from training_log_api.errors import Unauthorized
from training_log_api.models import TokenClaims

SECRET = "test-secret-key"


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(SECRET)


CLAIM_SETS = [
    TokenClaims(email="a@b.com", first_name="A", last_name="B", id="u1"),
    TokenClaims(
        email="ada@example.com",
        first_name="Ada",
        last_name="Lovelace",
        profile_picture="https://example.com/ada.jpg",
        id="0f8e7c3d9b2a4e6f8a1c3b5d7e9f0a2b",
    ),
    TokenClaims(email="ünï@cödé.org", first_name="Zoë", last_name="Ñúñez", id="x"),
]


class TestRoundTrip:
    """verify(issue(claims)) returns the claims."""

    @pytest.mark.parametrize("claims", CLAIM_SETS)
    def test_round_trip(self, tokens, claims):
        assert tokens.verify(tokens.issue(claims)) == claims

    def test_payload_uses_wire_names(self, tokens):
        token = tokens.issue(CLAIM_SETS[1])
        payload = jwt.decode(token, SECRET, algorithms=["HS256"])
        assert payload == {
            "email": "ada@example.com",
            "firstName": "Ada",
            "lastName": "Lovelace",
            "profilePicture": "https://example.com/ada.jpg",
            "id": "0f8e7c3d9b2a4e6f8a1c3b5d7e9f0a2b",
        }

    def test_no_expiry_by_default(self, tokens):
        payload = jwt.decode(tokens.issue(CLAIM_SETS[0]), SECRET, algorithms=["HS256"])
        assert "exp" not in payload


class TestTampering:
    """Any modification of an issued token is rejected."""

    def test_every_character_tampered(self, tokens):
        token = tokens.issue(CLAIM_SETS[1])
        # The last character of a base64url segment may only carry padding bits
        segment_ends = {i - 1 for i, ch in enumerate(token) if ch == "."} | {len(token) - 1}

        for i, ch in enumerate(token):
            if i in segment_ends:
                continue
            replacement = "A" if ch != "A" else "B"
            tampered = token[:i] + replacement + token[i + 1 :]
            with pytest.raises(Unauthorized):
                tokens.verify(tampered)

    def test_wrong_key_rejected(self, tokens):
        forged = TokenService("another-secret").issue(CLAIM_SETS[0])
        with pytest.raises(Unauthorized) as exc_info:
            tokens.verify(forged)
        assert "invalid token" in exc_info.value.detail

    def test_unsigned_token_rejected(self, tokens):
        unsigned = jwt.encode(CLAIM_SETS[0].model_dump(by_alias=True), None, algorithm="none")
        with pytest.raises(Unauthorized):
            tokens.verify(unsigned)

    @pytest.mark.parametrize("token", [None, "", "garbage", "a.b.c", "a.b"])
    def test_malformed_or_missing_rejected(self, tokens, token):
        with pytest.raises(Unauthorized):
            tokens.verify(token)

    def test_token_without_identity_claims_rejected(self, tokens):
        token = jwt.encode({"sub": "someone"}, SECRET, algorithm="HS256")
        with pytest.raises(Unauthorized) as exc_info:
            tokens.verify(token)
        assert "claims" in exc_info.value.detail


class TestExpiry:
    """Expiry is opt-in through expire_minutes."""

    def test_expiry_claim_added_when_configured(self):
        service = TokenService(SECRET, expire_minutes=5)
        payload = jwt.decode(service.issue(CLAIM_SETS[0]), SECRET, algorithms=["HS256"])
        assert payload["exp"] > time.time()
        assert payload["exp"] <= time.time() + 5 * 60 + 1

    def test_round_trip_with_expiry(self):
        service = TokenService(SECRET, expire_minutes=5)
        assert service.verify(service.issue(CLAIM_SETS[0])) == CLAIM_SETS[0]

    def test_expired_token_rejected(self, tokens):
        payload = {**CLAIM_SETS[0].model_dump(by_alias=True), "exp": 1}
        token = jwt.encode(payload, SECRET, algorithm="HS256")
        with pytest.raises(Unauthorized) as exc_info:
            tokens.verify(token)
        assert "expired" in exc_info.value.detail


def test_empty_secret_rejected():
    with pytest.raises(ValueError):
        TokenService("")
