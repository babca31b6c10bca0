"""Common shape of the per-resource-type syncers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from baton.zoom.api.client import ZoomClient
from baton.zoom.connector.resource_types import ResourceCatalog, ResourceTypeDescriptor
from baton.zoom.errors import EntitlementError, PrincipalTypeError
from baton.zoom.models import Entitlement, Grant, Page, Resource, ResourceId


class ResourceSyncer(ABC):
    """Lists resources of one type along with their entitlements and grants.

    Syncers hold no state between calls; pagination progress lives entirely
    in the token passed in and returned.
    """

    def __init__(self, client: ZoomClient, catalog: ResourceCatalog):
        self._client = client
        self._catalog = catalog

    @property
    @abstractmethod
    def resource_type(self) -> ResourceTypeDescriptor:
        ...

    @abstractmethod
    async def list(self, parent_id: ResourceId | None, token: str = "") -> Page[Resource]:
        ...

    @abstractmethod
    async def entitlements(self, resource: Resource, token: str = "") -> Page[Entitlement]:
        ...

    @abstractmethod
    async def grants(self, resource: Resource, token: str = "") -> Page[Grant]:
        ...

    def _frame(self, resource_id: str = "") -> ResourceId:
        return ResourceId(resource_type=self.resource_type.id, resource=resource_id)

    def _require_user(self, principal: ResourceId) -> None:
        if principal.resource_type != self._catalog.user.id:
            raise PrincipalTypeError(principal.resource_type, (self._catalog.user.id,))

    def _require_own(self, entitlement: Entitlement, allowed: tuple[str, ...]) -> None:
        owner = entitlement.resource.id.resource_type
        if owner != self.resource_type.id:
            raise EntitlementError(
                f"entitlement {entitlement.id} does not belong to a {self.resource_type.id}"
            )
        if entitlement.slug not in allowed:
            raise EntitlementError(
                f"unsupported {self.resource_type.id} entitlement '{entitlement.slug}'"
            )
