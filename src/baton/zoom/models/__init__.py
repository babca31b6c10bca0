"""Domain and upstream payload models."""

from .core import (
    Annotations,
    Entitlement,
    EntitlementPurpose,
    Grant,
    GroupProfile,
    Page,
    RateLimitDescription,
    Resource,
    ResourceId,
    RoleProfile,
    UserProfile,
    UserStatus,
    unique_grants,
)

__all__ = [
    "Annotations",
    "Entitlement",
    "EntitlementPurpose",
    "Grant",
    "GroupProfile",
    "Page",
    "RateLimitDescription",
    "Resource",
    "ResourceId",
    "RoleProfile",
    "UserProfile",
    "UserStatus",
    "unique_grants",
]
