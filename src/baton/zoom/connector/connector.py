"""Connector entry point: metadata, credential validation and syncer registry."""

from __future__ import annotations

from dataclasses import dataclass, field

from baton.zoom.api.client import ZoomClient
from baton.zoom.connector.base import ResourceSyncer
from baton.zoom.connector.contact_group import ContactGroupSyncer
from baton.zoom.connector.group import GroupSyncer
from baton.zoom.connector.resource_types import ResourceCatalog
from baton.zoom.connector.role import RoleSyncer
from baton.zoom.connector.user import UserSyncer
from baton.zoom.errors import ConnectorValidationError


@dataclass(frozen=True)
class AccountField:
    name: str
    display_name: str
    description: str
    placeholder: str
    required: bool = True


@dataclass(frozen=True)
class ConnectorMetadata:
    display_name: str
    description: str
    account_creation_fields: tuple[AccountField, ...] = field(default_factory=tuple)


ACCOUNT_CREATION_FIELDS = (
    AccountField(
        "email",
        "Email",
        "This email will be used as the login for the user.",
        "john.doe@example.com",
    ),
    AccountField(
        "first_name",
        "First Name",
        "First name of the person who will own the user.",
        "John",
    ),
    AccountField(
        "last_name",
        "Last Name",
        "Last name of the person who will own the user.",
        "Doe",
    ),
    AccountField(
        "display_name",
        "Display Name",
        "This is the name that will be displayed on the new account.",
        "John Doe",
    ),
)


class ZoomConnector:
    """Syncs users, groups, roles and contact groups from Zoom."""

    def __init__(self, client: ZoomClient, catalog: ResourceCatalog | None = None):
        self._client = client
        self._catalog = catalog or ResourceCatalog()
        self._syncers: dict[str, ResourceSyncer] = {
            syncer.resource_type.id: syncer
            for syncer in (
                UserSyncer(client, self._catalog),
                GroupSyncer(client, self._catalog),
                RoleSyncer(client, self._catalog),
                ContactGroupSyncer(client, self._catalog),
            )
        }

    @property
    def catalog(self) -> ResourceCatalog:
        return self._catalog

    def metadata(self) -> ConnectorMetadata:
        return ConnectorMetadata(
            display_name="Zoom",
            description="Connector syncing users, groups, roles and contact groups from Zoom.",
            account_creation_fields=ACCOUNT_CREATION_FIELDS,
        )

    async def validate(self) -> None:
        """Check the credentials belong to an admin.

        Every scope the connector needs is admin-only.
        """
        user, _ = await self._client.get_user("me")
        if user.role_name == "member":
            raise ConnectorValidationError("zoom-connector: user is not an admin")

    def resource_syncers(self) -> list[ResourceSyncer]:
        return list(self._syncers.values())

    def syncer(self, resource_type_id: str) -> ResourceSyncer:
        try:
            descriptor = self._catalog.get(resource_type_id)
        except KeyError:
            raise ConnectorValidationError(f"unknown resource type '{resource_type_id}'") from None
        return self._syncers[descriptor.id]
