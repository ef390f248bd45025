"""
Postboard Backend — Credential Utility Tests
==============================================

What:  Tests for PasswordHasher and TokenIssuer.
How:   Real bcrypt at the minimum cost factor, real JWT encode/decode.

What we test:
    ✅ Hashes are salted and verify only the original password
    ✅ Passwords over 72 UTF-8 bytes are refused, not truncated
    ✅ Malformed stored hashes verify as False
    ✅ Tokens round-trip; expired, foreign-key and incomplete tokens fail
"""

from datetime import timedelta

import pytest
from jose import jwt

from postboard.exceptions import PasswordTooLongError, UnauthorizedError
from postboard.security import BCRYPT_MAX_PASSWORD_BYTES, PasswordHasher, TokenIssuer

SECRET = "unit-test-secret-key-with-enough-length-0123"


class TestPasswordHasher:

    def test_hash_is_salted(self, hasher):
        """The same password hashes differently every time."""
        first = hasher.hash("s3cret-password")
        second = hasher.hash("s3cret-password")
        assert first != second
        assert first.startswith("$2b$")

    def test_hash_never_contains_plaintext(self, hasher):
        assert "s3cret-password" not in hasher.hash("s3cret-password")

    def test_verify_accepts_original(self, hasher):
        stored = hasher.hash("s3cret-password")
        assert hasher.verify("s3cret-password", stored) is True

    def test_verify_rejects_other_password(self, hasher):
        stored = hasher.hash("s3cret-password")
        assert hasher.verify("s3cret-passwore", stored) is False

    def test_verify_malformed_hash_is_false(self, hasher):
        """A corrupt stored hash is reported as a mismatch, not an exception."""
        assert hasher.verify("s3cret-password", "not-a-bcrypt-hash") is False

    def test_hash_at_byte_limit(self, hasher):
        password = "a" * BCRYPT_MAX_PASSWORD_BYTES
        assert hasher.verify(password, hasher.hash(password)) is True

    def test_verify_rejects_input_past_byte_limit(self, hasher):
        """A stored 72-byte password must not match a longer input sharing its prefix."""
        password = "a" * BCRYPT_MAX_PASSWORD_BYTES
        stored = hasher.hash(password)

        assert hasher.verify(password + "EXTRA-GARBAGE", stored) is False
        assert hasher.verify(password, stored) is True

    def test_hash_over_byte_limit_rejected(self, hasher):
        with pytest.raises(PasswordTooLongError):
            hasher.hash("a" * (BCRYPT_MAX_PASSWORD_BYTES + 1))

    def test_limit_counts_utf8_bytes(self, hasher):
        """37 two-byte characters are 74 bytes even though len() is 37."""
        with pytest.raises(PasswordTooLongError) as exc_info:
            hasher.hash("é" * 37)
        assert exc_info.value.context["password_bytes"] == 74

    def test_dummy_verify_does_not_raise(self, hasher):
        hasher.dummy_verify()

    def test_rounds_are_configurable(self):
        stored = PasswordHasher(rounds=5).hash("s3cret-password")
        assert stored.split("$")[2] == "05"


class TestTokenIssuer:

    def setup_method(self):
        self.issuer = TokenIssuer(secret_key=SECRET, expires_delta=timedelta(minutes=5))

    def test_issue_and_decode_round_trip(self):
        issued = self.issuer.issue(7, "alice")
        claims = self.issuer.decode(issued.access_token)

        assert claims.user_id == 7
        assert claims.username == "alice"
        assert abs((claims.expires_at - issued.expires_at).total_seconds()) < 1

    def test_subject_is_user_id_string(self):
        token = self.issuer.issue(7, "alice").access_token
        payload = jwt.get_unverified_claims(token)
        assert payload["sub"] == "7"
        assert payload["username"] == "alice"
        assert payload["exp"] > payload["iat"]

    def test_expired_token_rejected(self):
        issuer = TokenIssuer(secret_key=SECRET, expires_delta=timedelta(seconds=-10))
        token = issuer.issue(7, "alice").access_token

        with pytest.raises(UnauthorizedError, match="expired"):
            issuer.decode(token)

    def test_token_signed_with_other_key_rejected(self):
        other = TokenIssuer(secret_key="a-completely-different-signing-key-xyz-987")
        token = other.issue(7, "alice").access_token

        with pytest.raises(UnauthorizedError, match="Could not validate credentials"):
            self.issuer.decode(token)

    def test_garbage_token_rejected(self):
        with pytest.raises(UnauthorizedError):
            self.issuer.decode("definitely.not.a-jwt")

    def test_token_missing_username_rejected(self):
        token = jwt.encode({"sub": "7", "exp": 4102444800}, SECRET, algorithm="HS256")
        with pytest.raises(UnauthorizedError):
            self.issuer.decode(token)

    def test_non_numeric_subject_rejected(self):
        token = jwt.encode(
            {"sub": "alice", "username": "alice", "exp": 4102444800},
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(UnauthorizedError):
            self.issuer.decode(token)

    def test_from_settings(self, make_settings):
        settings = make_settings(access_token_expire_minutes=15, jwt_algorithm="hs512")
        issuer = TokenIssuer.from_settings(settings)

        token = issuer.issue(1, "bob").access_token
        assert jwt.get_unverified_header(token)["alg"] == "HS512"
        assert issuer.decode(token).user_id == 1
