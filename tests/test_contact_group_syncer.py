import pytest

from baton.zoom.connector.contact_group import ContactGroupSyncer, contact_group_resource
from baton.zoom.models import Resource
from baton.zoom.models.zoom import ContactGroup


@pytest.fixture
def contact_group(catalog) -> Resource:
    group = ContactGroup.model_validate({"group_id": "cg1", "group_name": "Sales", "group_privacy": 1})
    return contact_group_resource(catalog.contact_group, group)


@pytest.mark.asyncio
async def test_list_maps_contact_groups(client, catalog, fake_zoom):
    fake_zoom.contact_groups = [
        {"group_id": "cg1", "group_name": "Sales", "group_privacy": 1},
        {"group_id": "cg2", "group_name": "Support", "group_privacy": 2},
    ]
    syncer = ContactGroupSyncer(client, catalog)

    async with client:
        page = await syncer.list(None, "")

    assert [(r.id.resource_type, r.id.resource, r.display_name) for r in page.items] == [
        ("contactGroup", "cg1", "Sales"),
        ("contactGroup", "cg2", "Support"),
    ]
    assert page.next_token == ""


@pytest.mark.asyncio
async def test_member_entitlement_accepts_users_and_groups(client, catalog, contact_group):
    (entitlement,) = (await ContactGroupSyncer(client, catalog).entitlements(contact_group)).items

    assert entitlement.slug == "member"
    assert entitlement.grantable_to == ("user", "group")


@pytest.mark.asyncio
async def test_mixed_members_become_user_and_group_grants(client, catalog, fake_zoom, contact_group):
    fake_zoom.contact_group_members["cg1"] = [
        {"id": "u1", "name": "Ada", "type": 1},
        {"id": "g1", "name": "Eng", "type": 2},
    ]
    syncer = ContactGroupSyncer(client, catalog)

    async with client:
        page = await syncer.grants(contact_group, "")

    assert [g.id for g in page.items] == [
        "contactGroup:cg1:member:user:u1",
        "contactGroup:cg1:member:group:g1",
    ]
    assert page.next_token == ""


@pytest.mark.asyncio
async def test_unknown_member_type_is_skipped(client, catalog, fake_zoom, contact_group):
    fake_zoom.contact_group_members["cg1"] = [
        {"id": "x1", "type": 9},
        {"id": "u1", "type": 1},
    ]
    syncer = ContactGroupSyncer(client, catalog)

    async with client:
        page = await syncer.grants(contact_group, "")

    assert [g.principal.resource for g in page.items] == ["u1"]


@pytest.mark.asyncio
async def test_member_pages_end_with_empty_token(client, catalog, fake_zoom, contact_group):
    fake_zoom.contact_group_members["cg1"] = [{"id": f"u{i}", "type": 1} for i in range(5)]
    syncer = ContactGroupSyncer(client, catalog)

    tokens = []
    principals = []
    token = ""
    async with client:
        while True:
            page = await syncer.grants(contact_group, token)
            principals.extend(g.principal.resource for g in page.items)
            tokens.append(page.next_token)
            if not page.has_more:
                break
            token = page.next_token

    assert principals == ["u0", "u1", "u2", "u3", "u4"]
    assert len(tokens) == 3
    assert tokens[-1] == ""
    assert all('"resource_type_id":"contactGroup"' in t for t in tokens[:-1])
