"""Spoločné fixtures / Shared test fixtures."""

import os
import tempfile

# Dočasná databáza pred importom aplikácie / Temporary database before the app is imported
_db_dir = tempfile.mkdtemp(prefix="travel_costs_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ["DEBUG"] = "true"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from travel_costs.database import drop_db, engine, init_db  # noqa: E402
from travel_costs.main import app  # noqa: E402


@pytest.fixture
async def client():
    await init_db()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    await drop_db()
    await engine.dispose()
