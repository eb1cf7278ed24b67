"""Tenant API endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.models.user import User
from ..core.schemas.tenants import UpgradeResponse
from ..core.services import TenantService
from ..database import get_db_session
from ..middleware.auth import get_current_user

router = APIRouter(prefix="/tenants", tags=["tenants"])


@router.post("/{slug}/upgrade", response_model=UpgradeResponse)
async def upgrade_tenant(
    slug: str,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Upgrade the caller's tenant to the PRO plan (admins only)."""
    tenant_service = TenantService(session)
    return await tenant_service.upgrade(current_user, slug)
