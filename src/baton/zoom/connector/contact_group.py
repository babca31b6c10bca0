"""Zoom contact groups and their mixed user/group membership."""

from __future__ import annotations

import structlog

from baton.zoom.connector.base import ResourceSyncer
from baton.zoom.connector.membership import member_grant, resolve_member
from baton.zoom.connector.resource_types import ResourceTypeDescriptor
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
from baton.zoom.models.zoom import ContactGroup
from baton.zoom.pagination import parse_page_token
from baton.zoom.ratelimit import parse_resp

logger = structlog.get_logger()


def contact_group_resource(
    resource_type: ResourceTypeDescriptor,
    group: ContactGroup,
    parent_id: ResourceId | None = None,
) -> Resource:
    """Create a connector resource for a Zoom contact group."""
    return Resource(
        id=ResourceId(resource_type=resource_type.id, resource=group.id),
        display_name=group.name,
        profile=GroupProfile(group_name=group.name, group_id=group.id),
        parent_id=parent_id,
    )


class ContactGroupSyncer(ResourceSyncer):
    @property
    def resource_type(self) -> ResourceTypeDescriptor:
        return self._catalog.contact_group

    async def list(self, parent_id: ResourceId | None, token: str = "") -> Page[Resource]:
        bag, page = parse_page_token(token, self._frame())

        result = await self._client.get_contact_groups(page)
        next_token = bag.next_token(result.next_page_token)

        resources = [
            contact_group_resource(self.resource_type, group, parent_id) for group in result.items
        ]
        logger.debug("Listed contact groups", count=len(resources), has_more=bool(next_token))
        return Page(items=resources, next_token=next_token, annotations=parse_resp(result.response))

    def _entitlement(self, resource: Resource) -> Entitlement:
        slug = self._catalog.member_entitlement
        return Entitlement(
            resource=resource,
            slug=slug,
            purpose=EntitlementPurpose.ASSIGNMENT,
            display_name=f"{resource.display_name} group {slug}",
            description=f"Zoom {resource.display_name} group",
            grantable_to=(self._catalog.user.id, self._catalog.group.id),
        )

    async def entitlements(self, resource: Resource, token: str = "") -> Page[Entitlement]:
        return Page(items=[self._entitlement(resource)])

    async def grants(self, resource: Resource, token: str = "") -> Page[Grant]:
        bag, page = parse_page_token(token, self._frame(resource.id.resource))

        result = await self._client.get_contact_group_members(resource.id.resource, page)
        next_token = bag.next_token(result.next_page_token)

        entitlement = self._entitlement(resource)
        grants = []
        for record in result.items:
            member = resolve_member(record)
            if member is None:
                continue
            grants.append(member_grant(self._catalog, entitlement, member, resource.id))

        return Page(
            items=unique_grants(grants),
            next_token=next_token,
            annotations=parse_resp(result.response),
        )
