"""
Shared fixtures: settings and a throwaway SQLite database per test
"""
import pytest
import pytest_asyncio

from complaint_register.config import Settings
from complaint_register.database import DatabaseManager


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a temporary database and upload directory"""
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'complaints.db'}",
        UPLOAD_DIR=str(tmp_path / "uploads"),
    )


@pytest.fixture
def manager(settings):
    """Database manager bound to the temporary database"""
    return DatabaseManager(settings)


@pytest_asyncio.fixture
async def session(manager):
    """Open session on an initialized temporary database"""
    async with manager.get_session() as session:
        yield session
    await manager.close()
