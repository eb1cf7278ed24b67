"""
Authentication schemas.

These schemas define the API contracts for login and the denormalized
user/tenant view returned to clients.
"""

import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.tenant import Plan
from ..models.user import Role


class LoginRequest(BaseModel):
    """User login request schema.

    Both fields are optional here so that a missing one is answered with the
    login-specific 400 message instead of a generic validation error.
    """

    email: Optional[str] = Field(default=None, max_length=255, description="Account email")
    password: Optional[str] = Field(default=None, max_length=128, description="User password")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "admin@acme.test",
                "password": "password",
            }
        }
    )


class TenantResponse(BaseModel):
    """Tenant summary."""

    id: uuid.UUID = Field(description="Tenant unique identifier")
    slug: str = Field(description="URL-safe tenant key")
    name: str = Field(description="Display name")
    plan: Plan = Field(description="Subscription plan")

    model_config = ConfigDict(from_attributes=True)


class UserResponse(BaseModel):
    """User information with its tenant."""

    id: uuid.UUID = Field(description="User unique identifier")
    email: str = Field(description="Account email")
    role: Role = Field(description="Role inside the tenant")
    tenant: TenantResponse = Field(description="Tenant the user belongs to")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "email": "admin@acme.test",
                "role": "ADMIN",
                "tenant": {
                    "id": "3f1c2b9e-5d4a-4e8b-9c7d-1a2b3c4d5e6f",
                    "slug": "acme",
                    "name": "Acme",
                    "plan": "FREE",
                },
            }
        },
    )


class LoginResponse(BaseModel):
    """Identity token plus the user it was issued for."""

    token: str = Field(description="Signed identity token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(description="Token lifetime in seconds")
    user: UserResponse = Field(description="Authenticated user")


class CurrentUserResponse(BaseModel):
    """Wrapper for GET /auth/me."""

    user: UserResponse
