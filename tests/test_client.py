import httpx
import pytest

from baton.zoom.api.client import ZoomClient
from baton.zoom.config import ZoomSettings
from baton.zoom.errors import (
    NotFoundError,
    TransportError,
    UpstreamStatusError,
    ZoomAuthError,
)


@pytest.mark.asyncio
async def test_list_sends_pagination_and_auth(client, fake_zoom, sample_users):
    fake_zoom.users = sample_users

    async with client:
        page = await client.get_users("")

    request = fake_zoom.requests[0]
    assert request.url.path == "/v2/users"
    assert request.url.params["page_size"] == "50"
    assert request.url.params["next_page_token"] == ""
    assert request.headers["Authorization"] == "Bearer test-token"
    assert [u.id for u in page.items] == ["u1", "u2"]
    assert page.next_page_token == "2"
    assert page.response is not None


@pytest.mark.asyncio
async def test_group_members_are_drained(client, fake_zoom):
    fake_zoom.group_members["g1"] = [{"id": f"u{i}"} for i in range(5)]

    async with client:
        page = await client.get_group_members("g1")

    assert [u.id for u in page.items] == ["u0", "u1", "u2", "u3", "u4"]
    assert page.next_page_token == ""
    assert fake_zoom.paths() == ["/groups/g1/members"] * 3


@pytest.mark.asyncio
async def test_roles_are_unpaginated(client, fake_zoom):
    fake_zoom.roles = [{"id": "r1", "name": "Admin"}, {"id": "r2", "name": "Member"}]

    async with client:
        roles, response = await client.get_roles()

    assert [r.name for r in roles] == ["Admin", "Member"]
    assert "next_page_token" not in fake_zoom.requests[0].url.params
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_add_group_admins_body(client, fake_zoom):
    async with client:
        await client.add_group_admins("g1", "u1")

    assert fake_zoom.mutations == [("POST", "/groups/g1/admins", {"admins": [{"id": "u1"}]})]


@pytest.mark.asyncio
async def test_not_found_maps_to_not_found_error(client):
    async with client:
        with pytest.raises(NotFoundError) as e:
            await client.get_user("missing")

    assert e.value.status_code == 404


@pytest.mark.asyncio
async def test_unauthorized_maps_to_auth_error(client, fake_zoom):
    fake_zoom.failures[("GET", "/groups")] = (401, "Invalid access token")

    async with client:
        with pytest.raises(ZoomAuthError):
            await client.get_groups()


@pytest.mark.asyncio
async def test_server_error_carries_status_and_body(client, fake_zoom):
    fake_zoom.failures[("GET", "/contacts/groups")] = (500, "boom")

    async with client:
        with pytest.raises(UpstreamStatusError) as e:
            await client.get_contact_groups()

    assert e.value.status_code == 500
    assert e.value.body == "boom"


@pytest.mark.asyncio
async def test_timeout_is_retryable_transport_error(settings, token_provider):
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    client = ZoomClient(settings, token_provider=token_provider, transport=httpx.MockTransport(handler))
    async with client:
        with pytest.raises(TransportError) as e:
            await client.get_users()

    assert e.value.retryable is True


@pytest.mark.asyncio
async def test_missing_credentials_fail_before_request(fake_zoom, token_provider):
    settings = ZoomSettings(account_id="acc", client_id=None, client_secret=None, base_url="https://api.zoom.test/v2")
    client = ZoomClient(settings, token_provider=token_provider, transport=fake_zoom.transport())

    async with client:
        with pytest.raises(ZoomAuthError):
            await client.get_users()

    assert fake_zoom.requests == []
    assert token_provider.calls == 0


@pytest.mark.asyncio
async def test_client_requires_context_manager(client):
    with pytest.raises(RuntimeError):
        await client.get_users()
