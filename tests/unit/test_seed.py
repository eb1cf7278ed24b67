"""Tests for the demo data seeding."""

from sqlalchemy import func, select

from tenantnotes.core.models import Plan, Role, Tenant, User
from tenantnotes.core.repositories.user_repository import UserRepository
from tenantnotes.security.password import verify_password
from tenantnotes.seed import DEMO_PASSWORD, seed_demo_data


async def test_seed_creates_demo_tenants_and_accounts(test_session):
    tenants = await seed_demo_data(test_session)
    assert sorted(t.slug for t in tenants) == ["acme", "globex"]
    assert all(t.plan_value is Plan.FREE for t in tenants)

    repo = UserRepository(test_session)
    for slug in ("acme", "globex"):
        admin = await repo.get_by_email(f"admin@{slug}.test")
        user = await repo.get_by_email(f"user@{slug}.test")
        assert admin.role_value is Role.ADMIN
        assert user.role_value is Role.USER
        assert admin.tenant.slug == slug
        assert user.tenant.slug == slug
        assert verify_password(DEMO_PASSWORD, admin.password_hash)


async def test_seed_is_idempotent(test_session):
    await seed_demo_data(test_session)
    await seed_demo_data(test_session)

    tenant_count = await test_session.scalar(select(func.count(Tenant.id)))
    user_count = await test_session.scalar(select(func.count(User.id)))
    assert tenant_count == 2
    assert user_count == 4
