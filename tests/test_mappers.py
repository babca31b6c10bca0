import pytest

from baton.zoom.connector.contact_group import contact_group_resource
from baton.zoom.connector.group import group_resource
from baton.zoom.connector.resource_types import ResourceCatalog
from baton.zoom.connector.role import role_resource
from baton.zoom.connector.user import user_resource, user_status
from baton.zoom.models import GroupProfile, ResourceId, RoleProfile, UserProfile, UserStatus
from baton.zoom.models.zoom import ContactGroup, Group, Role, User

CATALOG = ResourceCatalog()


@pytest.mark.parametrize(
    "status, expected",
    [
        ("pending", UserStatus.UNSPECIFIED),
        ("inactive", UserStatus.DISABLED),
        ("active", UserStatus.ENABLED),
        ("weird-value", UserStatus.UNSPECIFIED),
        ("", UserStatus.UNSPECIFIED),
    ],
)
def test_user_status_mapping(status, expected):
    assert user_status(status) is expected


def test_user_resource_fields():
    user = User(
        id="u1",
        email="ada@example.com",
        first_name="Ada",
        last_name="Lovelace",
        display_name="Ada L.",
        status="active",
    )

    resource = user_resource(CATALOG.user, user)

    assert resource.id == ResourceId(resource_type="user", resource="u1")
    assert resource.display_name == "Ada L."
    assert resource.email == "ada@example.com"
    assert resource.status is UserStatus.ENABLED
    assert resource.parent_id is None
    assert resource.profile == UserProfile(
        first_name="Ada", last_name="Lovelace", login="ada@example.com", user_id="u1"
    )


def test_user_resource_display_name_fallbacks():
    named = user_resource(CATALOG.user, User(id="u1", first_name="Ada", last_name="Lovelace"))
    emailed = user_resource(CATALOG.user, User(id="u2", email="x@example.com"))
    bare = user_resource(CATALOG.user, User(id="u3"))

    assert named.display_name == "Ada Lovelace"
    assert emailed.display_name == "x@example.com"
    assert bare.display_name == "u3"


def test_user_resource_attaches_parent():
    parent = ResourceId(resource_type="group", resource="g1")
    resource = user_resource(CATALOG.user, User(id="u1"), parent)
    assert resource.parent_id == parent


def test_group_resource_profile():
    resource = group_resource(CATALOG.group, Group(id="g1", name="Engineering"))

    assert resource.id == ResourceId(resource_type="group", resource="g1")
    assert resource.display_name == "Engineering"
    assert resource.profile == GroupProfile(group_name="Engineering", group_id="g1")


def test_contact_group_resource_reads_upstream_field_names():
    group = ContactGroup.model_validate(
        {"group_id": "cg1", "group_name": "Sales", "group_privacy": 1, "description": ""}
    )

    resource = contact_group_resource(CATALOG.contact_group, group)

    assert resource.id == ResourceId(resource_type="contactGroup", resource="cg1")
    assert resource.profile == GroupProfile(group_name="Sales", group_id="cg1")


def test_role_resource_profile():
    resource = role_resource(CATALOG.role, Role(id="r1", name="Admin"))

    assert resource.id == ResourceId(resource_type="role", resource="r1")
    assert resource.profile == RoleProfile(role_name="Admin", role_id="r1")
