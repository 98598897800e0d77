"""Credential Hasher — one-way password hashing keyed by the server secret.

Invariants:
    - Plaintext passwords are never returned, stored or logged
    - verify() is True only when candidate and secret both match the stored hash
    - Mismatch is False; a corrupted hash, unencodable input or primitive failure is HashingFailureError

Design Decisions:
    - argon2id via argon2-cffi manages the per-hash salt itself
    - The server secret is applied as an HMAC-SHA256 pepper before argon2, because the
      high-level PasswordHasher has no keyed mode; a wrong secret therefore reads as a mismatch
"""

import hashlib
import hmac

from argon2 import PasswordHasher
from argon2.exceptions import (
    HashingError, InvalidHashError, VerificationError, VerifyMismatchError,
)

from hackerclone.core.domain_types import PasswordHash
from hackerclone.core.errors import HashingFailureError, ValidationError

_PH = PasswordHasher()


def _pepper(plain: str, secret: str) -> str:
    try:
        key, msg = secret.encode("utf-8"), plain.encode("utf-8")
    except UnicodeEncodeError as e:
        raise HashingFailureError("password or secret is not valid UTF-8") from e
    return hmac.new(key, msg, hashlib.sha256).hexdigest()


def hash_password(plain: str, secret: str, *, hasher: PasswordHasher = _PH) -> PasswordHash:
    if not plain:
        raise ValidationError("Password must not be empty", field="password")
    if not secret:
        raise HashingFailureError("server secret is empty")
    try:
        return PasswordHash(hasher.hash(_pepper(plain, secret)))
    except HashingError as e:
        raise HashingFailureError(str(e)) from e


def verify_password(
    candidate: str, stored_hash: str, secret: str, *, hasher: PasswordHasher = _PH,
) -> bool:
    if not stored_hash or not secret:
        raise HashingFailureError("stored hash or server secret is empty")
    # An empty candidate still pays for a full verify so it answers no faster.
    try:
        matched = hasher.verify(stored_hash, _pepper(candidate or "", secret))
    except VerifyMismatchError:
        return False
    except InvalidHashError as e:
        raise HashingFailureError("stored hash is not a valid argon2 hash") from e
    except VerificationError as e:
        raise HashingFailureError(str(e)) from e
    return bool(candidate) and matched


class CredentialHasher:
    """Binds the process-wide server secret to hash/verify."""

    def __init__(self, secret: str, hasher: PasswordHasher | None = None):
        if not secret:
            raise ValueError("CredentialHasher requires a non-empty secret")
        self._secret = secret
        self._hasher = hasher or _PH

    def hash(self, plain: str) -> PasswordHash:
        return hash_password(plain, self._secret, hasher=self._hasher)

    def verify(self, candidate: str, stored_hash: str) -> bool:
        return verify_password(candidate, stored_hash, self._secret, hasher=self._hasher)

    def __repr__(self) -> str:
        return "CredentialHasher(secret=***)"
