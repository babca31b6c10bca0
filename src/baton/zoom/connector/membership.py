"""Contact group member resolution.

A contact group member record is either a user or a user group, told apart
by its numeric `type`. The number is turned into one of two member kinds
here and never passed further.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

import structlog

from baton.zoom.connector.group import group_resource
from baton.zoom.connector.resource_types import ResourceCatalog
from baton.zoom.connector.user import user_resource
from baton.zoom.models import Entitlement, Grant, Resource, ResourceId
from baton.zoom.models.zoom import ContactGroupMember, Group, User

logger = structlog.get_logger()


class MemberType(IntEnum):
    USER = 1
    GROUP = 2


@dataclass(frozen=True)
class UserMember:
    id: str
    name: str = ""


@dataclass(frozen=True)
class GroupMember:
    id: str
    name: str = ""


Member = UserMember | GroupMember


def resolve_member(record: ContactGroupMember) -> Member | None:
    """Classify a member record; unknown types are skipped with a warning."""
    if record.type == MemberType.USER:
        return UserMember(id=record.id, name=record.name)
    if record.type == MemberType.GROUP:
        return GroupMember(id=record.id, name=record.name)

    logger.warning("Skipping contact group member of unknown type", member_id=record.id, type=record.type)
    return None


def member_principal(
    catalog: ResourceCatalog, member: Member, parent_id: ResourceId | None = None
) -> Resource:
    if isinstance(member, UserMember):
        return user_resource(catalog.user, User(id=member.id, display_name=member.name), parent_id)
    return group_resource(catalog.group, Group(id=member.id, name=member.name), parent_id)


def member_grant(
    catalog: ResourceCatalog,
    entitlement: Entitlement,
    member: Member,
    parent_id: ResourceId | None = None,
) -> Grant:
    """Grant `entitlement` to the user or group the member stands for."""
    return Grant(entitlement=entitlement, principal=member_principal(catalog, member, parent_id).id)
