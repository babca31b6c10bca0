"""Zoom administrative roles and role assignments."""

from __future__ import annotations

import structlog

from baton.zoom.connector.base import ResourceSyncer
from baton.zoom.connector.resource_types import ResourceTypeDescriptor
from baton.zoom.connector.user import user_resource
from baton.zoom.models import (
    Entitlement,
    EntitlementPurpose,
    Grant,
    Page,
    Resource,
    ResourceId,
    RoleProfile,
    unique_grants,
)
from baton.zoom.models.zoom import Role
from baton.zoom.pagination import parse_page_token
from baton.zoom.ratelimit import parse_resp

logger = structlog.get_logger()


def role_resource(
    resource_type: ResourceTypeDescriptor,
    role: Role,
    parent_id: ResourceId | None = None,
) -> Resource:
    """Create a connector resource for a Zoom role."""
    return Resource(
        id=ResourceId(resource_type=resource_type.id, resource=role.id),
        display_name=role.name,
        profile=RoleProfile(role_name=role.name, role_id=role.id),
        parent_id=parent_id,
    )


class RoleSyncer(ResourceSyncer):
    @property
    def resource_type(self) -> ResourceTypeDescriptor:
        return self._catalog.role

    async def list(self, parent_id: ResourceId | None, token: str = "") -> Page[Resource]:
        # /roles is not paginated; every call returns the full set.
        roles, response = await self._client.get_roles()

        resources = [role_resource(self.resource_type, role, parent_id) for role in roles]
        logger.debug("Listed roles", count=len(resources))
        return Page(items=resources, annotations=parse_resp(response))

    def _entitlement(self, resource: Resource) -> Entitlement:
        slug = self._catalog.member_entitlement
        return Entitlement(
            resource=resource,
            slug=slug,
            purpose=EntitlementPurpose.PERMISSION,
            display_name=f"{resource.display_name} role {slug}",
            description=f"Role {resource.display_name} in zoom",
            grantable_to=(self._catalog.user.id,),
        )

    async def entitlements(self, resource: Resource, token: str = "") -> Page[Entitlement]:
        return Page(items=[self._entitlement(resource)])

    async def grants(self, resource: Resource, token: str = "") -> Page[Grant]:
        bag, page = parse_page_token(token, self._frame(resource.id.resource))

        result = await self._client.get_role_members(resource.id.resource, page)
        next_token = bag.next_token(result.next_page_token)

        entitlement = self._entitlement(resource)
        grants = [
            Grant(
                entitlement=entitlement,
                principal=user_resource(self._catalog.user, user, resource.id).id,
            )
            for user in result.items
        ]
        return Page(
            items=unique_grants(grants),
            next_token=next_token,
            annotations=parse_resp(result.response),
        )

    async def grant(self, principal: Resource, entitlement: Entitlement) -> None:
        """Assign the role to a user."""
        self._require_user(principal.id)
        self._require_own(entitlement, (self._catalog.member_entitlement,))

        await self._client.assign_role(entitlement.resource.id.resource, principal.id.resource)
        logger.info("Assigned role", entitlement=entitlement.id, user_id=principal.id.resource)

    async def revoke(self, grant: Grant) -> None:
        """Unassign the role from a user."""
        self._require_user(grant.principal)
        self._require_own(grant.entitlement, (self._catalog.member_entitlement,))

        await self._client.unassign_role(
            grant.entitlement.resource.id.resource, grant.principal.resource
        )
        logger.info(
            "Unassigned role", entitlement=grant.entitlement.id, user_id=grant.principal.resource
        )
