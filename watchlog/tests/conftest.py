import os

# Set env vars BEFORE any imports from the project happen
os.environ.setdefault("OMDB_API_KEY", "test-omdb-key")
os.environ.setdefault("SUPABASE_URL", "https://identity.test")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest  # noqa: E402


@pytest.fixture
def fake_verifier():
    from core.errors import AuthenticationError
    from core.identity import IdentityVerifier, Principal

    class FakeVerifier(IdentityVerifier):
        def __init__(self):
            self.tokens = {
                "alice-token": Principal(id="user-alice", email="alice@example.com", created_at="2024-01-05T10:00:00Z"),
                "bob-token": Principal(id="user-bob", email="bob@example.com"),
            }
            self.calls: list[str] = []

        async def verify(self, token: str) -> Principal:
            self.calls.append(token)
            if token not in self.tokens:
                raise AuthenticationError()
            return self.tokens[token]

    return FakeVerifier()


@pytest.fixture
async def db_session():
    from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from models import Base

    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session
    await engine.dispose()
