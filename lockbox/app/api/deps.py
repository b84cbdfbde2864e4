# lockbox/app/api/deps.py
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from lockbox.app.db.base import get_db
from lockbox.app.security.auth_gate import AuthenticatedIdentity, AuthGate, auth_gate
from lockbox.app.security.cipher import CipherService, get_cipher
from lockbox.app.services.vault_store import VaultStore


def get_auth_gate() -> AuthGate:
    return auth_gate


def get_cipher_service() -> CipherService:
    return get_cipher()


async def get_current_identity(
        authorization: Optional[str] = Header(default=None),
        gate: AuthGate = Depends(get_auth_gate),
) -> AuthenticatedIdentity:
    # Raises MissingCredential / InvalidCredential -> uniform 401
    return gate.verify(authorization)


def get_vault_store(
        db: AsyncSession = Depends(get_db),
        cipher: CipherService = Depends(get_cipher_service),
) -> VaultStore:
    return VaultStore(db, cipher)
