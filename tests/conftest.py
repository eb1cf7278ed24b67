"""Shared pytest fixtures configured to use SQLite in-memory for tests."""

import logging
import os

# must be in place before the app (and its settings) are imported
os.environ["JWT_SECRET"] = "test-secret-key"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_TO_FILE"] = "false"
os.environ["TENANTNOTES_SKIP_LIFESPAN_DB"] = "1"

from datetime import datetime, timedelta, timezone
from typing import Dict

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from tenantnotes.config import get_settings
from tenantnotes.core.models import BaseModel, Note, Plan, Role, Tenant, User
from tenantnotes.core.repositories.user_repository import UserRepository
from tenantnotes.database import get_db_session
from tenantnotes.main import app
from tenantnotes.security.jwt import TokenClaims, TokenService
from tenantnotes.security.password import hash_password

# Silence extremely verbose DEBUG logs from aiosqlite to keep test output readable
logging.getLogger("aiosqlite").setLevel(logging.WARNING)

DEMO_PASSWORD = "password"


@pytest.fixture(scope="session")
def test_settings():
    """Settings built from the test environment above."""
    return get_settings()


@pytest.fixture(scope="session")
def token_service(test_settings):
    return TokenService.from_settings(test_settings)


@pytest.fixture(scope="session")
def password_hash():
    """bcrypt is slow; hash the demo password once per run."""
    return hash_password(DEMO_PASSWORD)


@pytest.fixture
async def test_engine():
    """Fresh SQLite in-memory engine per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,  # keep the same memory DB across connections
        connect_args={"check_same_thread": False},
    )

    # SQLite needs this for ON DELETE CASCADE
    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ANN001
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
        finally:
            cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def test_session(test_engine):
    """Database session for one test."""
    session_maker = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest.fixture
def test_app(test_session):
    """App wired to the test session."""

    async def _override_get_db():
        yield test_session

    app.dependency_overrides[get_db_session] = _override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(test_app):
    """Async HTTP client talking to the app in-process."""
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as ac:
        yield ac


async def create_tenant(session: AsyncSession, slug: str, plan: Plan = Plan.FREE) -> Tenant:
    tenant = Tenant(slug=slug, name=slug.capitalize(), plan=plan.value)
    session.add(tenant)
    await session.commit()
    return tenant


async def create_user(
    session: AsyncSession, tenant: Tenant, email: str, password_hash: str, role: Role = Role.USER
) -> User:
    user = User(email=email, password_hash=password_hash, role=role.value, tenant_id=tenant.id)
    session.add(user)
    await session.commit()
    # reload through the repository so the tenant relationship is populated
    return await UserRepository(session).get_by_email(email)


async def create_notes(session: AsyncSession, author: User, count: int, prefix: str = "Note") -> list:
    """Insert notes directly, bypassing the quota, with increasing timestamps."""
    base = datetime.now(timezone.utc) - timedelta(minutes=count)
    notes = []
    for i in range(count):
        note = Note(
            title=f"{prefix} {i + 1}",
            content=f"content {i + 1}",
            tenant_id=author.tenant_id,
            author_id=author.id,
            created_at=base + timedelta(minutes=i),
        )
        session.add(note)
        notes.append(note)
    await session.commit()
    return notes


@pytest.fixture
def make_notes(test_session):
    """Seed notes for a user without going through the quota."""

    async def _make(author: User, count: int, prefix: str = "Note") -> list:
        return await create_notes(test_session, author, count, prefix)

    return _make


@pytest.fixture
async def tenants(test_session) -> Dict[str, Tenant]:
    """Two FREE tenants, acme and globex."""
    return {
        "acme": await create_tenant(test_session, "acme"),
        "globex": await create_tenant(test_session, "globex"),
    }


@pytest.fixture
async def acme_admin(test_session, tenants, password_hash) -> User:
    return await create_user(test_session, tenants["acme"], "admin@acme.test", password_hash, Role.ADMIN)


@pytest.fixture
async def acme_user(test_session, tenants, password_hash) -> User:
    return await create_user(test_session, tenants["acme"], "user@acme.test", password_hash, Role.USER)


@pytest.fixture
async def globex_admin(test_session, tenants, password_hash) -> User:
    return await create_user(test_session, tenants["globex"], "admin@globex.test", password_hash, Role.ADMIN)


@pytest.fixture
async def globex_user(test_session, tenants, password_hash) -> User:
    return await create_user(test_session, tenants["globex"], "user@globex.test", password_hash, Role.USER)


@pytest.fixture
def issue_token(token_service):
    """Issue a token for a stored user."""

    def _issue(user: User) -> str:
        return token_service.issue(
            TokenClaims(
                user_id=user.id,
                tenant_id=user.tenant_id,
                role=Role(user.role),
                email=user.email,
            )
        )

    return _issue


@pytest.fixture
def auth_headers(issue_token):
    """Authorization headers for a stored user."""

    def _headers(user: User) -> Dict[str, str]:
        return {"Authorization": f"Bearer {issue_token(user)}"}

    return _headers
