"""Pytest configuration and fixtures."""

from __future__ import annotations

import json
import re
from typing import Any

import httpx
import pytest

from baton.zoom.api.client import ZoomClient
from baton.zoom.config import ZoomSettings
from baton.zoom.connector.resource_types import ResourceCatalog

BASE_URL = "https://api.zoom.test/v2"


class FakeTokenProvider:
    """Hands out a fixed token and counts requests for it."""

    def __init__(self, token: str = "test-token"):
        self.token = token
        self.calls = 0

    async def get_token(self, account_id: str, client_id: str, client_secret: str) -> str:
        self.calls += 1
        return self.token


class FakeZoom:
    """In-memory Zoom API served through httpx.MockTransport.

    Collections are paged `page_size` records at a time using the record
    offset as `next_page_token`.
    """

    def __init__(self, page_size: int = 2):
        self.page_size = page_size
        self.users: list[dict[str, Any]] = []
        self.groups: list[dict[str, Any]] = []
        self.roles: list[dict[str, Any]] = []
        self.contact_groups: list[dict[str, Any]] = []
        self.group_members: dict[str, list[dict[str, Any]]] = {}
        self.group_admins: dict[str, list[dict[str, Any]]] = {}
        self.role_members: dict[str, list[dict[str, Any]]] = {}
        self.contact_group_members: dict[str, list[dict[str, Any]]] = {}

        self.headers: dict[str, str] = {}
        self.failures: dict[tuple[str, str], tuple[int, str]] = {}
        self.keep_deleted_users = False

        self.requests: list[httpx.Request] = []
        self.mutations: list[tuple[str, str, Any]] = []

    # -- helpers -------------------------------------------------------------

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def paths(self, method: str | None = None) -> list[str]:
        return [
            self._path(r)
            for r in self.requests
            if method is None or r.method == method
        ]

    @staticmethod
    def _path(request: httpx.Request) -> str:
        return request.url.path.removeprefix("/v2")

    def _respond(self, status: int, payload: Any = None) -> httpx.Response:
        if payload is None:
            return httpx.Response(status, headers=self.headers)
        return httpx.Response(status, json=payload, headers=self.headers)

    def _page(self, request: httpx.Request, key: str, items: list[dict[str, Any]]) -> httpx.Response:
        token = request.url.params.get("next_page_token", "")
        offset = int(token) if token else 0
        end = offset + self.page_size
        return self._respond(
            200,
            {
                "next_page_token": str(end) if end < len(items) else "",
                "page_size": self.page_size,
                "total_records": len(items),
                key: items[offset:end],
            },
        )

    # -- routing -------------------------------------------------------------

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        method = request.method
        path = self._path(request)

        if (method, path) in self.failures:
            status, body = self.failures[(method, path)]
            return httpx.Response(status, text=body, headers=self.headers)

        body = json.loads(request.content) if request.content else None
        if method in ("POST", "DELETE"):
            self.mutations.append((method, path, body))

        if path == "/users":
            if method == "POST":
                info = body["user_info"]
                created = {
                    "id": f"new-{len(self.users) + 1}",
                    "email": info["email"],
                    "first_name": info["first_name"],
                    "last_name": info["last_name"],
                    "type": info["type"],
                }
                self.users.append({**created, "display_name": info["display_name"], "status": "pending"})
                return self._respond(201, created)
            return self._page(request, "users", self.users)

        if m := re.fullmatch(r"/users/([^/]+)", path):
            user_id = m.group(1)
            if user_id == "me" and self.users:
                return self._respond(200, self.users[0])
            user = next((u for u in self.users if u["id"] == user_id), None)
            if method == "DELETE":
                if user is None:
                    return self._respond(404, {"code": 1001, "message": "User does not exist"})
                if not self.keep_deleted_users:
                    self.users.remove(user)
                return self._respond(204)
            if user is None:
                return self._respond(404, {"code": 1001, "message": "User does not exist"})
            return self._respond(200, user)

        if path == "/groups":
            return self._page(request, "groups", self.groups)

        if m := re.fullmatch(r"/groups/([^/]+)/(members|admins)", path):
            group_id, kind = m.groups()
            store = self.group_members if kind == "members" else self.group_admins
            if method == "POST":
                store.setdefault(group_id, []).extend(body[kind])
                return self._respond(201, {"ids": ",".join(x["id"] for x in body[kind])})
            return self._page(request, kind, store.get(group_id, []))

        if m := re.fullmatch(r"/groups/([^/]+)/(members|admins)/([^/]+)", path):
            group_id, kind, user_id = m.groups()
            store = self.group_members if kind == "members" else self.group_admins
            store[group_id] = [u for u in store.get(group_id, []) if u["id"] != user_id]
            return self._respond(204)

        if path == "/roles":
            return self._respond(200, {"total_records": len(self.roles), "roles": self.roles})

        if m := re.fullmatch(r"/roles/([^/]+)/members", path):
            role_id = m.group(1)
            if method == "POST":
                self.role_members.setdefault(role_id, []).extend(body["members"])
                return self._respond(201, {"ids": ",".join(x["id"] for x in body["members"])})
            return self._page(request, "members", self.role_members.get(role_id, []))

        if m := re.fullmatch(r"/roles/([^/]+)/members/([^/]+)", path):
            role_id, user_id = m.groups()
            self.role_members[role_id] = [
                u for u in self.role_members.get(role_id, []) if u["id"] != user_id
            ]
            return self._respond(204)

        if path == "/contacts/groups":
            return self._page(request, "groups", self.contact_groups)

        if m := re.fullmatch(r"/contacts/groups/([^/]+)/members", path):
            return self._page(request, "group_members", self.contact_group_members.get(m.group(1), []))

        return self._respond(404, {"code": 300, "message": f"Unknown route {method} {path}"})


@pytest.fixture
def settings() -> ZoomSettings:
    """Settings pointing at the fake API."""
    return ZoomSettings(
        account_id="acc-1",
        client_id="client-1",
        client_secret="secret-1",
        base_url=BASE_URL,
    )


@pytest.fixture
def fake_zoom() -> FakeZoom:
    return FakeZoom()


@pytest.fixture
def token_provider() -> FakeTokenProvider:
    return FakeTokenProvider()


@pytest.fixture
def client(settings, fake_zoom, token_provider) -> ZoomClient:
    """Client wired to the fake API; enter it with `async with`."""
    return ZoomClient(settings, token_provider=token_provider, transport=fake_zoom.transport())


@pytest.fixture
def catalog() -> ResourceCatalog:
    return ResourceCatalog()


@pytest.fixture
def sample_users() -> list[dict[str, Any]]:
    return [
        {
            "id": "u1",
            "email": "ada@example.com",
            "first_name": "Ada",
            "last_name": "Lovelace",
            "display_name": "Ada Lovelace",
            "role_name": "Owner",
            "type": 2,
            "status": "active",
        },
        {
            "id": "u2",
            "email": "alan@example.com",
            "first_name": "Alan",
            "last_name": "Turing",
            "display_name": "Alan Turing",
            "role_name": "Member",
            "type": 1,
            "status": "inactive",
        },
        {
            "id": "u3",
            "email": "grace@example.com",
            "first_name": "Grace",
            "last_name": "Hopper",
            "display_name": "Grace Hopper",
            "role_name": "Member",
            "type": 1,
            "status": "pending",
        },
    ]
