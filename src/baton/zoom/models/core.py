"""Core domain models handed to the access-governance platform."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class UserStatus(str, Enum):
    """Account status of a user resource."""

    UNSPECIFIED = "unspecified"
    ENABLED = "enabled"
    DISABLED = "disabled"


class EntitlementPurpose(str, Enum):
    """Whether holding the entitlement means membership or a permission."""

    ASSIGNMENT = "assignment"
    PERMISSION = "permission"


class ResourceId(BaseModel):
    """Reference to a resource by type and external identifier."""

    model_config = ConfigDict(frozen=True)

    resource_type: str = Field(..., description="Resource type id (user, group, ...)")
    resource: str = Field(..., description="Upstream identifier")

    def __str__(self) -> str:
        return f"{self.resource_type}:{self.resource}"


class UserProfile(BaseModel):
    first_name: str = ""
    last_name: str = ""
    login: str = ""
    user_id: str = ""


class GroupProfile(BaseModel):
    group_name: str = ""
    group_id: str = ""


class RoleProfile(BaseModel):
    role_name: str = ""
    role_id: str = ""


class Resource(BaseModel):
    """A synchronized entity: user, group, role or contact group."""

    id: ResourceId
    display_name: str = ""
    profile: UserProfile | GroupProfile | RoleProfile | None = None
    parent_id: ResourceId | None = None

    # User trait
    status: UserStatus | None = None
    email: str | None = None


class Entitlement(BaseModel):
    """A grantable capability attached to a resource."""

    resource: Resource
    slug: str = Field(..., description="Entitlement name (member, admin)")
    purpose: EntitlementPurpose = EntitlementPurpose.ASSIGNMENT
    display_name: str = ""
    description: str = ""
    grantable_to: tuple[str, ...] = Field(default_factory=tuple)

    @property
    def id(self) -> str:
        return f"{self.resource.id}:{self.slug}"


class Grant(BaseModel):
    """Edge asserting that a principal holds an entitlement."""

    entitlement: Entitlement
    principal: ResourceId

    @property
    def id(self) -> str:
        return f"{self.entitlement.id}:{self.principal}"


class RateLimitDescription(BaseModel):
    """Quota state reported by Zoom for a single response."""

    limit: int = 0
    remaining: int = 0
    reset_at: datetime | None = None


Annotations = list[RateLimitDescription]


@dataclass
class Page(Generic[T]):
    """One call's worth of results plus the cursor to resume from.

    An empty `next_token` means there is nothing left to fetch.
    """

    items: list[T] = field(default_factory=list)
    next_token: str = ""
    annotations: Annotations = field(default_factory=list)

    @property
    def has_more(self) -> bool:
        return bool(self.next_token)


def unique_grants(grants: list[Grant]) -> list[Grant]:
    """Drop repeated grants, keeping the first occurrence."""
    seen: set[str] = set()
    out: list[Grant] = []
    for grant in grants:
        if grant.id in seen:
            continue
        seen.add(grant.id)
        out.append(grant)
    return out
