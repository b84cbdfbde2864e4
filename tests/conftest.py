"""
Shared pytest fixtures for the Lockbox test suite.

Required settings are put in the environment before anything under
`lockbox` is imported: settings load (and fail) at import time.

Every test gets its own SQLite file; the app's `get_db` dependency is
overridden to use it, so nothing touches ./lockbox.db. Raw row access in
fixtures goes through a plain sync engine on the same file so no fixture
has to run an event loop of its own.
"""
import os
import tempfile

os.environ.setdefault("SECRET_KEY", "test-signing-secret-do-not-use")
os.environ.setdefault("ENCRYPTION_KEY", "test-encryption-key-0123456789abcdef")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="lockbox-tests-"), "default.db"
)

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine, select, update  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from lockbox.app.db.base import Base  # noqa: E402
from lockbox.app.db.session import create_engine_for, create_sessionmaker  # noqa: E402
from lockbox.app.models.vault_item import VaultItem  # noqa: E402
from lockbox.app.security.cipher import CipherService  # noqa: E402
from lockbox.app.security.jwt import create_access_token  # noqa: E402


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "vault.db"


@pytest.fixture
def sync_engine(db_path):
    eng = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def engine(sync_engine, db_path):
    # NullPool: no connection outlives the event loop that opened it
    return create_engine_for(f"sqlite+aiosqlite:///{db_path}")


@pytest.fixture
def cipher():
    return CipherService(os.environ["ENCRYPTION_KEY"])


@pytest_asyncio.fixture
async def session(engine):
    maker = create_sessionmaker(engine)
    async with maker() as s:
        yield s


@pytest.fixture
def client(engine):
    """TestClient bound to the per-test database."""
    from lockbox.app.db.base import get_db
    from lockbox.app.main import app

    maker = create_sessionmaker(engine)

    async def override_get_db():
        async with maker() as s:
            yield s

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_token():
    def _make(owner_id: str, **kwargs) -> str:
        return create_access_token(owner_id, **kwargs)
    return _make


@pytest.fixture
def auth_headers(make_token):
    def _headers(owner_id: str) -> dict:
        return {"Authorization": f"Bearer {make_token(owner_id)}"}
    return _headers


@pytest.fixture
def stored_rows(sync_engine):
    """Read raw persisted rows (ciphertext as stored)."""
    def _fetch():
        with Session(sync_engine) as s:
            rows = s.execute(select(VaultItem)).scalars().all()
            s.expunge_all()
            return rows
    return _fetch


@pytest.fixture
def overwrite_column(sync_engine):
    """Write a raw value into one column of a stored row."""
    def _write(item_id, column, value):
        with Session(sync_engine) as s:
            s.execute(update(VaultItem).where(VaultItem.id == item_id).values({column: value}))
            s.commit()
    return _write
