"""Tenant plan service implementation."""

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..logging import get_logger
from ..models.tenant import Plan
from ..models.user import User
from ..repositories.tenant_repository import TenantRepository
from ..schemas.auth import TenantResponse
from ..schemas.tenants import UpgradeResponse
from .interfaces import ITenantService

logger = get_logger("tenants")

ADMIN_REQUIRED = "Only admins can upgrade subscriptions"
OWN_TENANT_ONLY = "You can only upgrade your own tenant"
UPGRADED = "Tenant upgraded to Pro plan successfully"


class TenantService(ITenantService):
    """Tenant service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.tenant_repo = TenantRepository(session)

    async def upgrade(self, current_user: User, slug: str) -> UpgradeResponse:
        """Upgrade the caller's own tenant to PRO. Idempotent."""
        if not current_user.is_admin:
            logger.warning(
                "Upgrade refused: caller is not an admin",
                extra={"user_id": str(current_user.id), "slug": slug},
            )
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=ADMIN_REQUIRED)

        if current_user.tenant.slug != slug:
            logger.warning(
                "Upgrade refused: foreign tenant",
                extra={"user_id": str(current_user.id), "slug": slug},
            )
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=OWN_TENANT_ONLY)

        tenant = await self.tenant_repo.set_plan(slug, Plan.PRO)
        if tenant is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tenant not found")

        logger.info("Tenant upgraded", extra={"tenant_id": str(tenant.id), "slug": slug})
        return UpgradeResponse(message=UPGRADED, tenant=TenantResponse.model_validate(tenant))
