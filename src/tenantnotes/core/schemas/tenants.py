"""Tenant plan schemas."""

from pydantic import BaseModel, Field

from .auth import TenantResponse


class UpgradeResponse(BaseModel):
    """Result of a plan upgrade."""

    message: str = Field(description="Outcome message")
    tenant: TenantResponse = Field(description="Updated tenant")
