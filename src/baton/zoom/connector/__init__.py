"""Per-resource-type syncers and the connector that groups them."""

from baton.zoom.connector.connector import ConnectorMetadata, ZoomConnector
from baton.zoom.connector.contact_group import ContactGroupSyncer, contact_group_resource
from baton.zoom.connector.group import GroupSyncer, group_resource
from baton.zoom.connector.membership import GroupMember, UserMember, member_grant, resolve_member
from baton.zoom.connector.resource_types import ResourceCatalog, ResourceTypeDescriptor
from baton.zoom.connector.role import RoleSyncer, role_resource
from baton.zoom.connector.user import UserSyncer, user_resource, user_status

__all__ = [
    "ConnectorMetadata",
    "ContactGroupSyncer",
    "GroupMember",
    "GroupSyncer",
    "ResourceCatalog",
    "ResourceTypeDescriptor",
    "RoleSyncer",
    "UserMember",
    "UserSyncer",
    "ZoomConnector",
    "contact_group_resource",
    "group_resource",
    "member_grant",
    "resolve_member",
    "role_resource",
    "user_resource",
    "user_status",
]
