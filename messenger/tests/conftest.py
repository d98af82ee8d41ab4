import os
import tempfile
import pytest
import pytest_asyncio
from pathlib import Path

# Configure test environment before the app modules read it
TEST_DB = Path(tempfile.gettempdir()) / f'messenger_test_{os.getpid()}.db'
os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{TEST_DB}'
os.environ.setdefault('JWT_SECRET', 'testsecret')
os.environ.setdefault('METRICS_ENABLED', '0')

from httpx import AsyncClient, ASGITransport  # noqa: E402
from messenger.models import engine, init_models, drop_models, AsyncSessionLocal  # noqa: E402
from messenger.models.members import Member  # noqa: E402
from messenger.crud import pwd_ctx  # noqa: E402
from messenger.auth import create_access_token, ROLE_CLAIM  # noqa: E402
from messenger.main import app  # noqa: E402


@pytest_asyncio.fixture(autouse=True)
async def db():
    await drop_models()
    await init_models()
    yield
    await engine.dispose()


@pytest.fixture(scope='session', autouse=True)
def remove_test_db():
    yield
    if TEST_DB.exists():
        TEST_DB.unlink()


@pytest_asyncio.fixture
async def make_member():
    async def _make(member_id: str, password: str = 'secret', role: str = 'USER'):
        async with AsyncSessionLocal() as session:
            member = Member(id=member_id, hashed_password=pwd_ctx.hash(password), display_name=member_id.title(), role=role)
            session.add(member)
            await session.commit()
            return member
    return _make


@pytest.fixture
def auth_headers():
    def _headers(member_id: str, role: str = 'USER'):
        token = create_access_token({'sub': member_id, ROLE_CLAIM: role})
        return {'Authorization': f'Bearer {token}'}
    return _headers


@pytest_asyncio.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url='http://test') as ac:
        yield ac
