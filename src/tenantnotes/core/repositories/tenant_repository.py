"""Tenant repository for database operations."""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.tenant import Plan, Tenant


class TenantRepository:
    """Repository for tenant database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_tenant(self, tenant_data: dict) -> Tenant:
        """Create new tenant."""
        tenant = Tenant(**tenant_data)
        self.session.add(tenant)
        await self.session.commit()
        await self.session.refresh(tenant)
        return tenant

    async def get_by_slug(self, slug: str) -> Optional[Tenant]:
        """Get tenant by slug."""
        stmt = select(Tenant).where(Tenant.slug == slug)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def lock_for_update(self, tenant_id: UUID) -> Optional[Tenant]:
        """Load the tenant row with a write lock held until commit/rollback.

        Serializes note creation per tenant on PostgreSQL; SQLite ignores
        FOR UPDATE and already serializes writers.
        """
        stmt = (
            select(Tenant)
            .where(Tenant.id == tenant_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def set_plan(self, slug: str, plan: Plan) -> Optional[Tenant]:
        """Change a tenant's plan."""
        tenant = await self.get_by_slug(slug)
        if not tenant:
            return None

        if tenant.plan != plan.value:
            tenant.plan = plan.value
            await self.session.commit()
            await self.session.refresh(tenant)
        return tenant
