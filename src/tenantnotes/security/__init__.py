"""Security utilities."""

from .jwt import TokenClaims, TokenService
from .password import hash_password, verify_password

__all__ = [
    "hash_password",
    "verify_password",
    "TokenClaims",
    "TokenService",
]
