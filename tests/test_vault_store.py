"""
Tests for VaultStore against a real SQLite database.

Covers:
- Fields are persisted as ciphertext, returned as plaintext
- Create echoes the caller's values and sets both timestamps
- List ordering (newest first), empty list, search
- Ownership isolation: read/update/delete of a foreign item is NotFound
- Validation failures write nothing
- Update replaces the whole record and bumps updated_at only
- Corrupted ciphertext raises DecryptionFailure
- Database errors surface as InternalFault
"""
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from lockbox.app.core.exceptions import DecryptionFailure, InternalFault, NotFound, ValidationError
from lockbox.app.models.vault_item import VaultItem
from lockbox.app.schemas.vault import VaultItemIn
from lockbox.app.services import vault_store as vault_store_module
from lockbox.app.services.vault_store import VaultStore

ALICE = "owner-alice"
BOB = "owner-bob"


@pytest.fixture
def store(session, cipher):
    return VaultStore(session, cipher)


@pytest.fixture
def ticking_clock(monkeypatch):
    """Deterministic, strictly increasing timestamps."""
    start = datetime(2026, 1, 1, tzinfo=timezone.utc)
    ticks = iter(range(10_000))
    monkeypatch.setattr(vault_store_module, "_utcnow", lambda: start + timedelta(seconds=next(ticks)))


def _item(**overrides):
    data = {"title": "Gmail", "username": "a@b.com", "password": "p@ss1"}
    data.update(overrides)
    return VaultItemIn(**data)


async def _rows(session):
    result = await session.execute(select(VaultItem))
    return result.scalars().all()


class TestCreate:
    async def test_echoes_plaintext(self, store):
        created = await store.create_item(ALICE, _item(url="https://mail.google.com"))
        assert created.title == "Gmail"
        assert created.username == "a@b.com"
        assert created.password == "p@ss1"
        assert created.url == "https://mail.google.com"
        assert created.notes == ""
        assert created.id
        assert created.created_at == created.updated_at

    async def test_persists_ciphertext_only(self, store, session, cipher):
        created = await store.create_item(ALICE, _item(notes="recovery codes"))
        (row,) = await _rows(session)

        assert row.id == created.id
        assert row.owner_id == ALICE
        for column, plain in [("title", "Gmail"), ("username", "a@b.com"),
                              ("password", "p@ss1"), ("notes", "recovery codes")]:
            stored = getattr(row, column)
            assert stored != plain
            assert plain not in stored
            assert cipher.decrypt_field(stored) == plain
        assert row.url == ""

    async def test_ids_are_unique(self, store):
        a = await store.create_item(ALICE, _item())
        b = await store.create_item(ALICE, _item())
        assert a.id != b.id

    @pytest.mark.parametrize("field", ["title", "username", "password"])
    async def test_required_fields(self, store, session, field):
        with pytest.raises(ValidationError):
            await store.create_item(ALICE, _item(**{field: ""}))
        with pytest.raises(ValidationError):
            await store.create_item(ALICE, _item(**{field: None}))
        assert await _rows(session) == []


class TestList:
    async def test_empty(self, store):
        assert await store.list_items(ALICE) == []

    async def test_newest_first(self, store, ticking_clock):
        for title in ("first", "second", "third"):
            await store.create_item(ALICE, _item(title=title))
        titles = [item.title for item in await store.list_items(ALICE)]
        assert titles == ["third", "second", "first"]

    async def test_decrypts_identically(self, store):
        created = await store.create_item(ALICE, _item(url="u", notes="n"))
        (listed,) = await store.list_items(ALICE)
        assert listed == created

    async def test_scoped_to_owner(self, store):
        await store.create_item(ALICE, _item(title="alice's"))
        await store.create_item(BOB, _item(title="bob's"))
        assert [i.title for i in await store.list_items(BOB)] == ["bob's"]

    async def test_search(self, store):
        await store.create_item(ALICE, _item(title="GitHub", username="dev"))
        await store.create_item(ALICE, _item(title="Bank", username="me", url="https://bank.example"))
        await store.create_item(ALICE, _item(title="Mail", username="github-bot"))

        assert {i.title for i in await store.list_items(ALICE, search="github")} == {"GitHub", "Mail"}
        assert [i.title for i in await store.list_items(ALICE, search="BANK.EX")] == ["Bank"]
        assert await store.list_items(ALICE, search="nothing") == []


class TestGet:
    async def test_own_item(self, store):
        created = await store.create_item(ALICE, _item())
        assert await store.get_item(ALICE, created.id) == created

    async def test_foreign_item_is_not_found(self, store):
        created = await store.create_item(ALICE, _item())
        with pytest.raises(NotFound):
            await store.get_item(BOB, created.id)

    async def test_unknown_id(self, store):
        with pytest.raises(NotFound):
            await store.get_item(ALICE, "does-not-exist")


class TestUpdate:
    async def test_replaces_whole_record(self, store, session, cipher, ticking_clock):
        created = await store.create_item(ALICE, _item(url="old-url", notes="old notes"))
        updated = await store.update_item(
            ALICE, created.id, _item(title="Gmail 2", username="new@b.com", password="n3w"),
        )

        assert updated.id == created.id
        assert (updated.title, updated.username, updated.password) == ("Gmail 2", "new@b.com", "n3w")
        # Not supplied on update -> cleared
        assert updated.url == ""
        assert updated.notes == ""
        assert updated.created_at == created.created_at
        assert updated.updated_at > created.updated_at

        (row,) = await _rows(session)
        await session.refresh(row)
        assert cipher.decrypt_field(row.title) == "Gmail 2"
        assert row.url == ""
        assert await store.get_item(ALICE, created.id) == updated

    async def test_foreign_owner_gets_not_found_and_nothing_changes(self, store, session):
        created = await store.create_item(ALICE, _item())
        with pytest.raises(NotFound):
            await store.update_item(BOB, created.id, _item(title="pwned"))
        assert await store.get_item(ALICE, created.id) == created

    async def test_unknown_id(self, store):
        with pytest.raises(NotFound):
            await store.update_item(ALICE, "missing", _item())

    async def test_validation_before_write(self, store):
        created = await store.create_item(ALICE, _item())
        with pytest.raises(ValidationError):
            await store.update_item(ALICE, created.id, _item(password=""))
        assert await store.get_item(ALICE, created.id) == created


class TestDelete:
    async def test_deletes_own_item(self, store):
        created = await store.create_item(ALICE, _item())
        await store.delete_item(ALICE, created.id)
        assert await store.list_items(ALICE) == []
        with pytest.raises(NotFound):
            await store.delete_item(ALICE, created.id)

    async def test_foreign_owner_gets_not_found(self, store):
        created = await store.create_item(ALICE, _item())
        with pytest.raises(NotFound):
            await store.delete_item(BOB, created.id)
        assert [i.id for i in await store.list_items(ALICE)] == [created.id]


class TestFailures:
    async def test_corrupted_ciphertext(self, store, session):
        created = await store.create_item(ALICE, _item())
        (row,) = await _rows(session)
        row.password = row.password[:-6] + "AAAAAA"
        await session.commit()

        with pytest.raises(DecryptionFailure):
            await store.list_items(ALICE)
        with pytest.raises(DecryptionFailure):
            await store.get_item(ALICE, created.id)

    async def test_database_error_becomes_internal_fault(self, store, session, monkeypatch):
        async def broken_execute(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(session, "execute", broken_execute)
        with pytest.raises(InternalFault):
            await store.list_items(ALICE)


async def test_init_models_creates_table(tmp_path):
    from sqlalchemy import inspect

    from lockbox.app.db.init_db import init_models
    from lockbox.app.db.session import create_engine_for

    eng = create_engine_for(f"sqlite+aiosqlite:///{tmp_path / 'fresh.db'}")
    await init_models(eng)
    await init_models(eng, drop=True)
    async with eng.connect() as conn:
        tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
    await eng.dispose()
    assert tables == ["vault_items"]
