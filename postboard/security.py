"""
Postboard Backend — Credential Utilities
==========================================

What:  Password hashing/verification and signed access-token issuance.
Why:   Keeps every credential primitive behind two small classes so services
       and routes never touch passlib or jose directly.
How:   PasswordHasher wraps a passlib CryptContext (bcrypt);
       TokenIssuer wraps python-jose JWT encode/decode with an HMAC key.

Token format:
    {"sub": "<user id>", "username": "<name>", "iat": <unix>, "exp": <unix>}

    There is no revocation list: a token stays valid until `exp` even if
    the account changes afterwards.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from postboard.config import Settings
from postboard.exceptions import PasswordTooLongError, UnauthorizedError

logger = logging.getLogger(__name__)

# bcrypt ignores everything past the first 72 bytes; we refuse instead of truncating
BCRYPT_MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """Salted bcrypt hashing through passlib."""

    def __init__(self, rounds: int = 12):
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        """
        Hash a plaintext password for storage.

        Two calls with the same input return different hashes (random salt).

        Raises:
            PasswordTooLongError: UTF-8 encoding is longer than 72 bytes
        """
        size = len(password.encode("utf-8"))
        if size > BCRYPT_MAX_PASSWORD_BYTES:
            raise PasswordTooLongError(context={"password_bytes": size})
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        """
        Check a plaintext password against a stored hash.

        A malformed stored hash is logged and reported as a mismatch, so
        callers only ever see "valid" or "invalid".
        """
        # bcrypt would compare only the first 72 bytes; a longer input can never match
        if len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            self._context.dummy_verify()
            return False
        try:
            return self._context.verify(password, password_hash)
        except (ValueError, TypeError) as e:
            logger.error("Stored password hash could not be verified: %s", type(e).__name__)
            return False

    def dummy_verify(self) -> None:
        """Spend the time of one verification when there is no stored hash."""
        self._context.dummy_verify()


@dataclass(frozen=True)
class IssuedToken:
    access_token: str
    expires_at: datetime


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    username: str
    expires_at: datetime


class TokenIssuer:
    """
    Issues and verifies HMAC-signed JWT access tokens.

    The signing key never leaves the server; both issuance and verification
    use the same instance configuration.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expires_delta: timedelta = timedelta(minutes=60)):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expires_delta = expires_delta

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenIssuer":
        return cls(
            secret_key=settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            expires_delta=timedelta(minutes=settings.access_token_expire_minutes),
        )

    def issue(self, user_id: int, username: str) -> IssuedToken:
        """Sign a token asserting `user_id`/`username`, valid for the configured duration."""
        issued_at = datetime.now(timezone.utc)
        expires_at = issued_at + self._expires_delta
        claims = {
            "sub": str(user_id),
            "username": username,
            "iat": issued_at,
            "exp": expires_at,
        }
        token = jwt.encode(claims, self._secret_key, algorithm=self._algorithm)
        return IssuedToken(access_token=token, expires_at=expires_at)

    def decode(self, token: str) -> TokenClaims:
        """
        Verify signature and expiry, then return the identity claims.

        Raises:
            UnauthorizedError: expired, tampered, malformed, or missing claims
        """
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except ExpiredSignatureError:
            raise UnauthorizedError(message="Access token has expired")
        except JWTError as e:
            raise UnauthorizedError(
                message="Could not validate credentials",
                context={"reason": str(e)},
            )

        subject = payload.get("sub")
        username = payload.get("username")
        expires = payload.get("exp")
        if subject is None or username is None or expires is None:
            raise UnauthorizedError(message="Could not validate credentials")
        try:
            user_id = int(subject)
        except (TypeError, ValueError):
            raise UnauthorizedError(message="Could not validate credentials")

        return TokenClaims(
            user_id=user_id,
            username=username,
            expires_at=datetime.fromtimestamp(expires, tz=timezone.utc),
        )
