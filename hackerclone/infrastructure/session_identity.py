"""Session Identity — signed, opaque tokens that bind a login to a username.

Invariants:
    - A token resolves only under the secret and salt that signed it
    - resolve() never returns an empty username; every failure is UnauthenticatedError
    - No expiry unless max_age_seconds is configured; no revocation list

Design Decisions:
    - itsdangerous URLSafeTimedSerializer: cookie-safe, tamper-evident, timestamped so an
      expiry can be switched on later without changing the token format
    - The shell persists the token (cookie); nothing is stored server-side
"""

from dataclasses import dataclass

from itsdangerous import BadData, SignatureExpired, URLSafeTimedSerializer

from hackerclone.core.domain_types import SessionToken
from hackerclone.core.errors import UnauthenticatedError

DEFAULT_SALT = "hackerclone.session.v1"


@dataclass(frozen=True)
class SessionIdentity:
    username: str
    token: SessionToken

    def __repr__(self) -> str:
        return f"SessionIdentity(username={self.username!r})"


class SessionSigner:
    """Issues and resolves session tokens."""

    def __init__(
        self,
        secret: str,
        *,
        salt: str = DEFAULT_SALT,
        max_age_seconds: int | None = None,
    ):
        if not secret:
            raise ValueError("SessionSigner requires a non-empty secret")
        self._serializer = URLSafeTimedSerializer(secret_key=secret, salt=salt)
        self.max_age_seconds = max_age_seconds

    def issue(self, username: str) -> SessionIdentity:
        u = (username or "").strip()
        if not u:
            raise ValueError("cannot issue a session for an empty username")
        return SessionIdentity(username=u, token=SessionToken(self._serializer.dumps({"u": u})))

    def resolve(self, token: str | None) -> str:
        """Return the username bound to token."""
        if not token:
            raise UnauthenticatedError()
        try:
            data = self._serializer.loads(token, max_age=self.max_age_seconds)
        except SignatureExpired:
            raise UnauthenticatedError("Session expired")
        except BadData:
            raise UnauthenticatedError("Invalid session")
        u = str((data or {}).get("u") or "").strip() if isinstance(data, dict) else ""
        if not u:
            raise UnauthenticatedError("Invalid session")
        return u
