"""Application Context — the single handle that carries the pool and the secret into services.

Invariants:
    - Built once at startup from Settings; read-only for the process lifetime
    - Services get their collaborators from here, never from module globals
    - close() disposes the pool exactly once at shutdown

Design Decisions:
    - Plain dataclass passed through app.state: tests build their own with a temp database
"""

from dataclasses import dataclass

from hackerclone.config import Settings
from hackerclone.infrastructure.credential_hasher import CredentialHasher
from hackerclone.infrastructure.database import DatabaseSessionManager
from hackerclone.infrastructure.session_identity import SessionSigner
from hackerclone.services.auth_service import AuthService
from hackerclone.services.content_store import ContentStore


@dataclass(frozen=True)
class AppContext:
    settings: Settings
    db: DatabaseSessionManager
    store: ContentStore
    auth: AuthService

    async def close(self) -> None:
        await self.db.dispose()


def build_context(settings: Settings, db: DatabaseSessionManager | None = None) -> AppContext:
    """Wire pool, hasher, signer and services from settings."""
    if db is None:
        db = DatabaseSessionManager(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            pool_timeout=settings.database_pool_timeout,
        )
    store = ContentStore(db)
    auth = AuthService(
        store,
        CredentialHasher(settings.secret_key),
        SessionSigner(settings.secret_key, max_age_seconds=settings.session_max_age_seconds),
    )
    return AppContext(settings=settings, db=db, store=store, auth=auth)
