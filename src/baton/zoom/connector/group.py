"""Zoom user groups, their members and admins."""

from __future__ import annotations

import structlog

from baton.zoom.connector.base import ResourceSyncer
from baton.zoom.connector.resource_types import ResourceTypeDescriptor
from baton.zoom.connector.user import user_resource
from baton.zoom.models import (
    Entitlement,
    EntitlementPurpose,
    Grant,
    GroupProfile,
    Page,
    Resource,
    ResourceId,
    unique_grants,
)
from baton.zoom.models.zoom import Group
from baton.zoom.pagination import parse_page_token
from baton.zoom.ratelimit import parse_resp

logger = structlog.get_logger()


def group_resource(
    resource_type: ResourceTypeDescriptor,
    group: Group,
    parent_id: ResourceId | None = None,
) -> Resource:
    """Create a connector resource for a Zoom group."""
    return Resource(
        id=ResourceId(resource_type=resource_type.id, resource=group.id),
        display_name=group.name,
        profile=GroupProfile(group_name=group.name, group_id=group.id),
        parent_id=parent_id,
    )


class GroupSyncer(ResourceSyncer):
    @property
    def resource_type(self) -> ResourceTypeDescriptor:
        return self._catalog.group

    async def list(self, parent_id: ResourceId | None, token: str = "") -> Page[Resource]:
        bag, page = parse_page_token(token, self._frame())

        result = await self._client.get_groups(page)
        next_token = bag.next_token(result.next_page_token)

        resources = [group_resource(self.resource_type, group, parent_id) for group in result.items]
        logger.debug("Listed groups", count=len(resources), has_more=bool(next_token))
        return Page(items=resources, next_token=next_token, annotations=parse_resp(result.response))

    def _entitlement(self, resource: Resource, slug: str) -> Entitlement:
        return Entitlement(
            resource=resource,
            slug=slug,
            purpose=EntitlementPurpose.ASSIGNMENT,
            display_name=f"{resource.display_name} group {slug}",
            description=f"Zoom {resource.display_name} group",
            grantable_to=(self._catalog.user.id,),
        )

    async def entitlements(self, resource: Resource, token: str = "") -> Page[Entitlement]:
        return Page(
            items=[self._entitlement(resource, slug) for slug in self._catalog.group_entitlements]
        )

    async def grants(self, resource: Resource, token: str = "") -> Page[Grant]:
        """All member and admin grants of a group in one call.

        Both listings are drained page by page before returning, so the
        returned token is always empty.
        """
        group_id = resource.id.resource
        member = self._entitlement(resource, self._catalog.member_entitlement)
        admin = self._entitlement(resource, self._catalog.admin_entitlement)

        members = await self._client.get_group_members(group_id)
        admins = await self._client.get_group_admins(group_id)

        grants = [
            Grant(entitlement=member, principal=user_resource(self._catalog.user, user, resource.id).id)
            for user in members.items
        ]
        grants.extend(
            Grant(entitlement=admin, principal=user_resource(self._catalog.user, user, resource.id).id)
            for user in admins.items
        )

        logger.debug(
            "Listed group grants",
            group_id=group_id,
            members=len(members.items),
            admins=len(admins.items),
        )
        return Page(
            items=unique_grants(grants),
            annotations=parse_resp(members.response) + parse_resp(admins.response),
        )

    async def grant(self, principal: Resource, entitlement: Entitlement) -> None:
        """Add a user to a group as member or admin."""
        self._require_user(principal.id)
        self._require_own(entitlement, self._catalog.group_entitlements)

        group_id = entitlement.resource.id.resource
        user_id = principal.id.resource
        if entitlement.slug == self._catalog.admin_entitlement:
            await self._client.add_group_admins(group_id, user_id)
        else:
            await self._client.add_group_members(group_id, user_id)
        logger.info("Granted group entitlement", entitlement=entitlement.id, user_id=user_id)

    async def revoke(self, grant: Grant) -> None:
        """Remove a user's membership or admin rights from a group."""
        self._require_user(grant.principal)
        self._require_own(grant.entitlement, self._catalog.group_entitlements)

        group_id = grant.entitlement.resource.id.resource
        user_id = grant.principal.resource
        if grant.entitlement.slug == self._catalog.admin_entitlement:
            await self._client.delete_group_admin(group_id, user_id)
        else:
            await self._client.delete_group_member(group_id, user_id)
        logger.info("Revoked group entitlement", entitlement=grant.entitlement.id, user_id=user_id)
