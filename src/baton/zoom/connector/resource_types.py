"""Resource type descriptors and entitlement names.

Built once at startup and passed to every syncer, so no syncer reaches for
module-level lookup tables.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Trait(str, Enum):
    USER = "user"
    GROUP = "group"
    ROLE = "role"


@dataclass(frozen=True)
class ResourceTypeDescriptor:
    """Describes one kind of synchronized resource."""

    id: str
    display_name: str
    traits: tuple[Trait, ...] = ()


MEMBER_ENTITLEMENT = "member"
ADMIN_ENTITLEMENT = "admin"


@dataclass(frozen=True)
class ResourceCatalog:
    """The resource types this connector syncs and their entitlements."""

    user: ResourceTypeDescriptor = field(
        default_factory=lambda: ResourceTypeDescriptor("user", "User", (Trait.USER,))
    )
    group: ResourceTypeDescriptor = field(
        default_factory=lambda: ResourceTypeDescriptor("group", "Group", (Trait.GROUP,))
    )
    contact_group: ResourceTypeDescriptor = field(
        default_factory=lambda: ResourceTypeDescriptor(
            "contactGroup", "Contact Group", (Trait.GROUP,)
        )
    )
    role: ResourceTypeDescriptor = field(
        default_factory=lambda: ResourceTypeDescriptor("role", "Role", (Trait.ROLE,))
    )
    member_entitlement: str = MEMBER_ENTITLEMENT
    admin_entitlement: str = ADMIN_ENTITLEMENT

    @property
    def group_entitlements(self) -> tuple[str, ...]:
        return (self.member_entitlement, self.admin_entitlement)

    def all(self) -> tuple[ResourceTypeDescriptor, ...]:
        return (self.user, self.group, self.role, self.contact_group)

    def get(self, resource_type_id: str) -> ResourceTypeDescriptor:
        for descriptor in self.all():
            if descriptor.id == resource_type_id:
                return descriptor
        raise KeyError(resource_type_id)
