"""Auth Service — registration, login and session authorization.

Invariants:
    - Holds no persistent state; only returns User records and SessionIdentity values
    - login() never reveals whether the username or the password was wrong:
      unknown user, mismatch and HashingFailureError all become InvalidCredentialsError
    - authorize() resolves a token to a live User or raises UnauthenticatedError

Design Decisions:
    - argon2 work runs in a worker thread so the event loop keeps serving requests
    - Unknown usernames still pay for one verify against a throwaway hash, keeping
      response timing close to the wrong-password path
"""

import asyncio
import logging

from hackerclone.core.errors import (
    HashingFailureError, InvalidCredentialsError, ResourceNotFoundError,
    UnauthenticatedError,
)
from hackerclone.infrastructure.credential_hasher import CredentialHasher
from hackerclone.infrastructure.session_identity import SessionIdentity, SessionSigner
from hackerclone.models.user import User
from hackerclone.services.content_store import ContentStore

logger = logging.getLogger(__name__)


class AuthService:
    """Orchestrates CredentialHasher, ContentStore and SessionSigner."""

    def __init__(
        self,
        store: ContentStore,
        hasher: CredentialHasher,
        signer: SessionSigner,
    ):
        self.store = store
        self.hasher = hasher
        self.signer = signer
        self._dummy_hash: str | None = None

    async def register(self, username: str, email: str, password: str) -> User:
        password_hash = await asyncio.to_thread(self.hasher.hash, password)
        return await self.store.create_user(username, email, password_hash)

    async def login(self, username: str, password: str) -> SessionIdentity:
        try:
            user = await self.store.find_user_by_username(username)
        except ResourceNotFoundError:
            user = None

        try:
            if user is None:
                await self._burn_verify(password)
                ok = False
            else:
                ok = await asyncio.to_thread(self.hasher.verify, password, user.password)
        except HashingFailureError as e:
            logger.error(f"Credential check failed: {e.message}", extra={"username": username})
            ok = False
        if not ok:
            logger.info("Login rejected", extra={"username": username})
            raise InvalidCredentialsError()

        logger.info("Login succeeded", extra={"username": user.username})
        return self.signer.issue(user.username)

    async def authorize(self, identity: SessionIdentity | str | None) -> User:
        """Resolve a session (or its raw token) back to the User it was issued for."""
        token = identity.token if isinstance(identity, SessionIdentity) else identity
        username = self.signer.resolve(token)
        try:
            return await self.store.find_user_by_username(username)
        except ResourceNotFoundError:
            raise UnauthenticatedError("Session user no longer exists")

    async def _burn_verify(self, password: str) -> None:
        if self._dummy_hash is None:
            self._dummy_hash = await asyncio.to_thread(self.hasher.hash, "not-a-real-password")
        await asyncio.to_thread(self.hasher.verify, password, self._dummy_hash)
