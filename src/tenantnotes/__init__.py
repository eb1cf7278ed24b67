"""
TenantNotes Backend - multi-tenant note taking with plan quotas

Tenant-isolated notes behind a JWT access gateway, with FREE/PRO plans.
"""

__version__ = "1.0.0"
