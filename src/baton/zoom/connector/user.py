"""Zoom users: listing, account creation and deletion."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

import structlog

from baton.zoom.connector.base import ResourceSyncer
from baton.zoom.connector.resource_types import ResourceTypeDescriptor
from baton.zoom.errors import DeletionNotConfirmedError, MissingProfileFieldError, NotFoundError
from baton.zoom.models import (
    Entitlement,
    Grant,
    Page,
    Resource,
    ResourceId,
    UserProfile,
    UserStatus,
)
from baton.zoom.models.zoom import ActionType, User, UserCreationBody, UserCreationInfo, UserType
from baton.zoom.pagination import parse_page_token
from baton.zoom.ratelimit import parse_resp

logger = structlog.get_logger()

# Profile fields required to create an account, in display order.
ACCOUNT_FIELDS = ("email", "first_name", "last_name", "display_name")

_STATUS = {
    "pending": UserStatus.UNSPECIFIED,
    "inactive": UserStatus.DISABLED,
    "active": UserStatus.ENABLED,
}


def user_status(status: str) -> UserStatus:
    """Translate a Zoom status string; unknown values map to unspecified."""
    return _STATUS.get(status, UserStatus.UNSPECIFIED)


def user_resource(
    resource_type: ResourceTypeDescriptor,
    user: User,
    parent_id: ResourceId | None = None,
) -> Resource:
    """Create a connector resource for a Zoom user."""
    display_name = (
        user.display_name
        or " ".join(part for part in (user.first_name, user.last_name) if part)
        or user.email
        or user.id
    )
    return Resource(
        id=ResourceId(resource_type=resource_type.id, resource=user.id),
        display_name=display_name,
        profile=UserProfile(
            first_name=user.first_name,
            last_name=user.last_name,
            login=user.email,
            user_id=user.id,
        ),
        parent_id=parent_id,
        status=user_status(user.status),
        email=user.email,
    )


class CredentialOption(str, Enum):
    NO_PASSWORD = "no_password"


@dataclass(frozen=True)
class CredentialDetails:
    """Credential options offered when provisioning accounts."""

    supported: tuple[CredentialOption, ...]
    preferred: CredentialOption


def create_new_user_info(profile: Mapping[str, Any]) -> UserCreationBody:
    """Build the creation request, rejecting profiles with missing fields."""
    values = {}
    for name in ACCOUNT_FIELDS:
        value = profile.get(name)
        if not isinstance(value, str) or not value:
            raise MissingProfileFieldError(name)
        values[name] = value

    return UserCreationBody(
        action=ActionType.CREATE,
        user_info=UserCreationInfo(type=UserType.BASIC, **values),
    )


class UserSyncer(ResourceSyncer):
    @property
    def resource_type(self) -> ResourceTypeDescriptor:
        return self._catalog.user

    async def list(self, parent_id: ResourceId | None, token: str = "") -> Page[Resource]:
        bag, page = parse_page_token(token, self._frame())

        result = await self._client.get_users(page)
        next_token = bag.next_token(result.next_page_token)

        resources = [user_resource(self.resource_type, user, parent_id) for user in result.items]
        logger.debug("Listed users", count=len(resources), has_more=bool(next_token))
        return Page(items=resources, next_token=next_token, annotations=parse_resp(result.response))

    async def entitlements(self, resource: Resource, token: str = "") -> Page[Entitlement]:
        return Page()

    async def grants(self, resource: Resource, token: str = "") -> Page[Grant]:
        return Page()

    def create_account_capability_details(self) -> CredentialDetails:
        return CredentialDetails(
            supported=(CredentialOption.NO_PASSWORD,),
            preferred=CredentialOption.NO_PASSWORD,
        )

    async def create_account(self, profile: Mapping[str, Any]) -> Resource:
        """Create a Zoom user from an account profile.

        Zoom e-mails the new user an activation link; no password is set here.
        """
        body = create_new_user_info(profile)
        created = await self._client.create_user(body)

        return user_resource(
            self.resource_type,
            User(
                id=created.id,
                email=created.email or body.user_info.email,
                first_name=created.first_name or body.user_info.first_name,
                last_name=created.last_name or body.user_info.last_name,
                display_name=body.user_info.display_name,
                type=created.type,
            ),
        )

    async def delete(self, principal: ResourceId) -> None:
        """Delete a user and confirm it can no longer be fetched."""
        self._require_user(principal)
        user_id = principal.resource

        await self._client.delete_user(user_id)

        try:
            await self._client.get_user(user_id)
        except NotFoundError:
            logger.info("Deleted user", user_id=user_id)
            return
        except Exception as e:
            raise DeletionNotConfirmedError(
                f"error deleting user. Could not confirm user {user_id} is gone: {e}"
            ) from e

        raise DeletionNotConfirmedError(f"error deleting user. User {user_id} still exists")
