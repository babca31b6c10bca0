"""Zoom REST API client.

Wraps the endpoints the connector needs:
- Users (list, get, create, delete)
- Groups and their members/admins
- Roles and their members
- Contact groups and their members
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import httpx
from pydantic import BaseModel

from baton.zoom.api.auth import ZoomTokenProvider
from baton.zoom.config import ZoomSettings
from baton.zoom.errors import (
    NotFoundError,
    TransportError,
    UpstreamStatusError,
    ZoomAuthError,
    ZoomError,
)
from baton.zoom.models.zoom import (
    AdminsPage,
    ContactGroup,
    ContactGroupMember,
    ContactGroupMembersPage,
    ContactGroupsPage,
    Group,
    GroupsPage,
    MembersPage,
    Pagination,
    Role,
    RolesList,
    User,
    UserCreationBody,
    UserCreationResponse,
    UsersPage,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
P = TypeVar("P", bound=Pagination)


@dataclass
class ApiPage(Generic[T]):
    """Records from one upstream page and the response they came with.

    For drained listings `response` is the last page's response and
    `next_page_token` is always empty.
    """

    items: list[T]
    next_page_token: str
    response: httpx.Response | None


class ZoomClient:
    """Async client for the Zoom REST API."""

    def __init__(
        self,
        settings: ZoomSettings,
        token_provider: ZoomTokenProvider | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._settings = settings
        self._token_provider = token_provider or ZoomTokenProvider(
            auth_url=settings.auth_url, timeout=settings.timeout
        )
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "ZoomClient":
        """Async context manager entry."""
        self._client = httpx.AsyncClient(
            base_url=self._settings.base_url,
            timeout=self._settings.timeout,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def settings(self) -> ZoomSettings:
        """Get settings."""
        return self._settings

    # -------------------------------------------------------------------------
    # HTTP helpers
    # -------------------------------------------------------------------------

    async def _headers(self) -> dict[str, str]:
        """Get request headers with auth token."""
        missing = self._settings.missing_credentials()
        if missing:
            raise ZoomAuthError(
                f"No credentials provided: {', '.join(missing)} missing. "
                "Use --account-id/--client-id/--client-secret or BATON_* variables"
            )
        token = await self._token_provider.get_token(
            self._settings.account_id,
            self._settings.client_id,
            self._settings.client_secret,
        )
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "Authorization": f"Bearer {token}",
        }

    def _pagination_params(self, next_token: str) -> dict[str, str]:
        return {
            "next_page_token": next_token,
            "page_size": str(self._settings.page_size),
        }

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, str] | None = None,
        json: dict | None = None,
    ) -> tuple[Any, httpx.Response]:
        if self._client is None:
            raise RuntimeError("ZoomClient must be used as an async context manager")

        headers = await self._headers()
        try:
            response = await self._client.request(
                method, path, params=params, json=json, headers=headers
            )
        except httpx.TimeoutException as e:
            raise TransportError(f"{method} {path} timed out: {e}") from e
        except httpx.TransportError as e:
            raise TransportError(f"{method} {path} failed: {e}") from e

        return self._handle_response(response), response

    async def _get(
        self, path: str, params: dict[str, str] | None = None
    ) -> tuple[Any, httpx.Response]:
        """Make GET request to the API."""
        return await self._request("GET", path, params=params)

    async def _post(self, path: str, json: dict | None = None) -> Any:
        """Make POST request to the API."""
        data, _ = await self._request("POST", path, json=json)
        return data

    async def _delete(self, path: str) -> None:
        """Make DELETE request to the API."""
        await self._request("DELETE", path)

    def _handle_response(self, response: httpx.Response) -> Any:
        """Handle API response."""
        if response.status_code == 404:
            raise NotFoundError(
                f"Resource not found: {response.request.url}",
                status_code=404,
                body=response.text,
            )

        if response.status_code == 401:
            raise ZoomAuthError(
                "Authentication expired or invalid",
                status_code=401,
                body=response.text,
            )

        if response.status_code >= 400:
            raise UpstreamStatusError(
                f"request failed with status code {response.status_code}: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise ZoomError(
                f"Invalid JSON from {response.request.url}",
                status_code=response.status_code,
                body=response.text,
            ) from e

    async def _get_page(
        self, path: str, model: type[P], items_field: str, next_token: str
    ) -> ApiPage[Any]:
        data, response = await self._get(path, params=self._pagination_params(next_token))
        page = model.model_validate(data or {})
        return ApiPage(
            items=getattr(page, items_field),
            next_page_token=page.next_page_token,
            response=response,
        )

    async def _drain(self, path: str, model: type[P], items_field: str) -> ApiPage[Any]:
        """Fetch every page of a listing, one after the other."""
        items: list[Any] = []
        token = ""
        pages = 0
        while True:
            page = await self._get_page(path, model, items_field, token)
            items.extend(page.items)
            pages += 1
            if not page.next_page_token:
                break
            token = page.next_page_token

        logger.debug("Drained %s: %d records over %d pages", path, len(items), pages)
        return ApiPage(items=items, next_page_token="", response=page.response)

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    async def get_users(self, next_token: str = "") -> ApiPage[User]:
        """List one page of users."""
        return await self._get_page("/users", UsersPage, "users", next_token)

    async def get_user(self, user_id: str) -> tuple[User, httpx.Response]:
        """Get user details; `me` resolves to the authenticated user."""
        data, response = await self._get(f"/users/{user_id}")
        return User.model_validate(data or {}), response

    async def create_user(self, body: UserCreationBody) -> UserCreationResponse:
        """Create a user."""
        logger.debug("Creating user: %s", body.user_info.email)
        data = await self._post("/users", json=body.model_dump(mode="json"))
        created = UserCreationResponse.model_validate(data or {})
        logger.info("Created user: %s (id=%s)", created.email, created.id)
        return created

    async def delete_user(self, user_id: str) -> None:
        """Delete a user."""
        logger.debug("Deleting user: %s", user_id)
        await self._delete(f"/users/{user_id}")
        logger.info("Deleted user: %s", user_id)

    # -------------------------------------------------------------------------
    # Groups
    # -------------------------------------------------------------------------

    async def get_groups(self, next_token: str = "") -> ApiPage[Group]:
        """List one page of groups."""
        return await self._get_page("/groups", GroupsPage, "groups", next_token)

    async def get_group_members(self, group_id: str) -> ApiPage[User]:
        """List all members of a group."""
        return await self._drain(f"/groups/{group_id}/members", MembersPage, "members")

    async def get_group_admins(self, group_id: str) -> ApiPage[User]:
        """List all admins of a group."""
        return await self._drain(f"/groups/{group_id}/admins", AdminsPage, "admins")

    async def add_group_members(self, group_id: str, user_id: str) -> None:
        """Add a user to a group."""
        logger.debug("Adding member %s to group %s", user_id, group_id)
        await self._post(f"/groups/{group_id}/members", json={"members": [{"id": user_id}]})

    async def add_group_admins(self, group_id: str, user_id: str) -> None:
        """Make a user admin of a group."""
        logger.debug("Adding admin %s to group %s", user_id, group_id)
        await self._post(f"/groups/{group_id}/admins", json={"admins": [{"id": user_id}]})

    async def delete_group_member(self, group_id: str, user_id: str) -> None:
        """Remove a user from a group."""
        logger.debug("Removing member %s from group %s", user_id, group_id)
        await self._delete(f"/groups/{group_id}/members/{user_id}")

    async def delete_group_admin(self, group_id: str, user_id: str) -> None:
        """Remove a group admin."""
        logger.debug("Removing admin %s from group %s", user_id, group_id)
        await self._delete(f"/groups/{group_id}/admins/{user_id}")

    # -------------------------------------------------------------------------
    # Roles
    # -------------------------------------------------------------------------

    async def get_roles(self) -> tuple[list[Role], httpx.Response]:
        """List all roles. Zoom does not paginate this endpoint."""
        data, response = await self._get("/roles")
        return RolesList.model_validate(data or {}).roles, response

    async def get_role_members(self, role_id: str, next_token: str = "") -> ApiPage[User]:
        """List one page of role members."""
        return await self._get_page(f"/roles/{role_id}/members", MembersPage, "members", next_token)

    async def assign_role(self, role_id: str, user_id: str) -> None:
        """Assign a role to a user."""
        logger.debug("Assigning role %s to user %s", role_id, user_id)
        await self._post(f"/roles/{role_id}/members", json={"members": [{"id": user_id}]})

    async def unassign_role(self, role_id: str, user_id: str) -> None:
        """Unassign a role from a user."""
        logger.debug("Unassigning role %s from user %s", role_id, user_id)
        await self._delete(f"/roles/{role_id}/members/{user_id}")

    # -------------------------------------------------------------------------
    # Contact groups
    # -------------------------------------------------------------------------

    async def get_contact_groups(self, next_token: str = "") -> ApiPage[ContactGroup]:
        """List one page of contact groups."""
        return await self._get_page("/contacts/groups", ContactGroupsPage, "groups", next_token)

    async def get_contact_group_members(
        self, group_id: str, next_token: str = ""
    ) -> ApiPage[ContactGroupMember]:
        """List one page of contact group members."""
        return await self._get_page(
            f"/contacts/groups/{group_id}/members",
            ContactGroupMembersPage,
            "group_members",
            next_token,
        )
