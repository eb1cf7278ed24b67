"""Provision the demo tenants and accounts.

Usage:
    python -m tenantnotes.seed

Creates the FREE tenants ``acme`` and ``globex``, each with
``admin@<slug>.test`` (ADMIN) and ``user@<slug>.test`` (USER). Every account
uses the password ``password``. Existing rows are left untouched.
"""

import asyncio
from typing import List, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from .core.logging import get_logger, setup_logging
from .core.models.tenant import Plan, Tenant
from .core.models.user import Role
from .core.repositories.tenant_repository import TenantRepository
from .core.repositories.user_repository import UserRepository
from .security.password import hash_password

logger = get_logger("seed")

DEMO_PASSWORD = "password"

DEMO_TENANTS: List[Tuple[str, str]] = [
    ("acme", "Acme"),
    ("globex", "Globex"),
]


async def seed_tenant(session: AsyncSession, slug: str, name: str, password_hash: str) -> Tenant:
    """Create one tenant and its two accounts if missing."""
    tenant_repo = TenantRepository(session)
    user_repo = UserRepository(session)

    tenant = await tenant_repo.get_by_slug(slug)
    if tenant is None:
        tenant = await tenant_repo.create_tenant({"slug": slug, "name": name, "plan": Plan.FREE.value})
        logger.info("Created tenant", extra={"slug": slug})

    for local_part, role in (("admin", Role.ADMIN), ("user", Role.USER)):
        email = f"{local_part}@{slug}.test"
        if await user_repo.get_by_email(email) is None:
            await user_repo.create_user(
                {
                    "email": email,
                    "password_hash": password_hash,
                    "role": role.value,
                    "tenant_id": tenant.id,
                }
            )
            logger.info("Created user", extra={"email": email, "role": role.value})

    return tenant


async def seed_demo_data(session: AsyncSession) -> List[Tenant]:
    """Seed every demo tenant. Safe to run repeatedly."""
    password_hash = hash_password(DEMO_PASSWORD)
    return [
        await seed_tenant(session, slug, name, password_hash) for slug, name in DEMO_TENANTS
    ]


async def main() -> None:
    from .database import AsyncSessionLocal, create_tables

    await create_tables()
    async with AsyncSessionLocal() as session:
        tenants = await seed_demo_data(session)
    logger.info("Seed complete", extra={"tenants": [t.slug for t in tenants]})


if __name__ == "__main__":
    setup_logging()
    asyncio.run(main())
