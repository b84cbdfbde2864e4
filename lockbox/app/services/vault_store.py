# lockbox/app/services/vault_store.py
"""
CRUD for vault items, scoped to the authenticated owner.

Plaintext comes in from the API, every text field is encrypted before it is
written, and decrypted on the way out. Ownership is part of every WHERE
clause: update and delete are single conditional statements matching both
`id` and `owner_id`, so a foreign or missing item is the same NotFound.
"""
import logging
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Dict, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from lockbox.app.core.exceptions import (
    DecryptionFailure,
    InternalFault,
    NotFound,
    ValidationError,
)
from lockbox.app.models.vault_item import VaultItem
from lockbox.app.schemas.vault import VaultItemIn, VaultItemResponse
from lockbox.app.security.cipher import CipherService

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "username", "password")
OPTIONAL_FIELDS = ("url", "notes")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone=True columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class VaultStore:

    def __init__(self, db: AsyncSession, cipher: CipherService):
        self.db = db
        self.cipher = cipher

    # ── helpers ────────────────────────────────────────────────────────

    @staticmethod
    def validate(data: VaultItemIn) -> None:
        if not all(getattr(data, name) for name in REQUIRED_FIELDS):
            raise ValidationError("Title, username, and password are required")

    def _encrypt_fields(self, data: VaultItemIn) -> Dict[str, str]:
        self.validate(data)
        fields = {name: self.cipher.encrypt_field(getattr(data, name)) for name in REQUIRED_FIELDS}
        for name in OPTIONAL_FIELDS:
            value = getattr(data, name)
            fields[name] = self.cipher.encrypt_field(value) if value else ""
        return fields

    def _decrypt_item(self, item: VaultItem) -> VaultItemResponse:
        try:
            return VaultItemResponse(
                id=item.id,
                title=self.cipher.decrypt_field(item.title),
                username=self.cipher.decrypt_field(item.username),
                password=self.cipher.decrypt_field(item.password),
                url=self.cipher.decrypt_field(item.url) if item.url else "",
                notes=self.cipher.decrypt_field(item.notes) if item.notes else "",
                created_at=_as_utc(item.created_at),
                updated_at=_as_utc(item.updated_at),
            )
        except DecryptionFailure:
            logger.error("Could not decrypt vault item %s", item.id)
            raise

    @staticmethod
    def _echo(item_id: str, data: VaultItemIn, created_at: datetime, updated_at: datetime) -> VaultItemResponse:
        return VaultItemResponse(
            id=item_id,
            title=data.title,
            username=data.username,
            password=data.password,
            url=data.url or "",
            notes=data.notes or "",
            created_at=_as_utc(created_at),
            updated_at=_as_utc(updated_at),
        )

    @asynccontextmanager
    async def _persistence(self, action: str):
        """Map database errors to InternalFault, rolling back first."""
        try:
            yield
        except SQLAlchemyError as e:
            logger.exception("Database error during %s", action)
            await self.db.rollback()
            raise InternalFault() from e

    # ── operations ─────────────────────────────────────────────────────

    async def list_items(self, owner_id: str, search: Optional[str] = None) -> List[VaultItemResponse]:
        """
        All of the owner's items, newest first. `search` filters on
        decrypted title, username and url, case-insensitively.
        """
        query = (
            select(VaultItem)
            .where(VaultItem.owner_id == owner_id)
            .order_by(VaultItem.created_at.desc())
            .execution_options(populate_existing=True)
        )
        async with self._persistence("list"):
            result = await self.db.execute(query)
            rows = result.scalars().all()

        items = [self._decrypt_item(row) for row in rows]
        if search:
            term = search.lower()
            items = [
                item for item in items
                if term in item.title.lower()
                or term in item.username.lower()
                or term in item.url.lower()
            ]
        return items

    async def get_item(self, owner_id: str, item_id: str) -> VaultItemResponse:
        query = (
            select(VaultItem)
            .where(VaultItem.id == item_id, VaultItem.owner_id == owner_id)
            .execution_options(populate_existing=True)
        )
        async with self._persistence("get"):
            result = await self.db.execute(query)
            item = result.scalars().first()

        if item is None:
            raise NotFound()
        return self._decrypt_item(item)

    async def create_item(self, owner_id: str, data: VaultItemIn) -> VaultItemResponse:
        fields = self._encrypt_fields(data)
        now = _utcnow()
        item = VaultItem(
            id=str(uuid.uuid4()),
            owner_id=owner_id,
            created_at=now,
            updated_at=now,
            **fields,
        )
        async with self._persistence("create"):
            self.db.add(item)
            await self.db.commit()

        logger.info("Created vault item %s for owner %s", item.id, owner_id)
        return self._echo(item.id, data, now, now)

    async def update_item(self, owner_id: str, item_id: str, data: VaultItemIn) -> VaultItemResponse:
        fields = self._encrypt_fields(data)
        now = _utcnow()
        stmt = (
            update(VaultItem)
            .where(VaultItem.id == item_id, VaultItem.owner_id == owner_id)
            .values(updated_at=now, **fields)
            .returning(VaultItem.created_at)
            .execution_options(synchronize_session=False)
        )
        async with self._persistence("update"):
            result = await self.db.execute(stmt)
            row = result.first()
            if row is None:
                await self.db.rollback()
            else:
                await self.db.commit()

        if row is None:
            raise NotFound()
        logger.info("Updated vault item %s for owner %s", item_id, owner_id)
        return self._echo(item_id, data, row.created_at, now)

    async def delete_item(self, owner_id: str, item_id: str) -> None:
        stmt = (
            delete(VaultItem)
            .where(VaultItem.id == item_id, VaultItem.owner_id == owner_id)
            .execution_options(synchronize_session=False)
        )
        async with self._persistence("delete"):
            result = await self.db.execute(stmt)
            deleted = result.rowcount
            if deleted:
                await self.db.commit()
            else:
                await self.db.rollback()

        if not deleted:
            raise NotFound()
        logger.info("Deleted vault item %s for owner %s", item_id, owner_id)
