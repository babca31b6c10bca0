"""Pydantic models for Zoom REST API payloads.

Only the fields the connector reads or writes are declared; anything else
Zoom returns is ignored.
"""

from __future__ import annotations

from enum import Enum, IntEnum

from pydantic import BaseModel, ConfigDict, Field


class ActionType(str, Enum):
    """How Zoom provisions a newly created user."""

    CREATE = "create"
    AUTO_CREATE = "autoCreate"
    CUST_CREATE = "custCreate"
    SSO_CREATE = "ssoCreate"


class UserType(IntEnum):
    """Zoom license type."""

    BASIC = 1
    LICENSED = 2
    UNASSIGNED = 3
    NONE = 99


class Pagination(BaseModel):
    """Pagination echo returned by list endpoints."""

    next_page_token: str = Field(default="", description="Token for the next page")
    page_size: int = Field(default=0, description="Records per page")
    total_records: int = Field(default=0, description="Total records available")


class User(BaseModel):
    """A Zoom user, also used for group, admin and role member records."""

    id: str
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    display_name: str = ""
    role_name: str = ""
    role_id: str = ""
    type: int = 0
    status: str = ""


class Group(BaseModel):
    """A Zoom user group."""

    id: str
    name: str = ""
    total_members: int = 0


class Role(BaseModel):
    """A Zoom administrative role."""

    id: str
    name: str = ""
    description: str = ""
    type: str = ""
    total_members: int = 0


class ContactGroup(BaseModel):
    """A Zoom contact group."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="group_id")
    name: str = Field(default="", alias="group_name")
    privacy: int = Field(default=0, alias="group_privacy")
    description: str = ""


class ContactGroupMember(BaseModel):
    """A contact group member; `type` is 1 for users and 2 for groups."""

    id: str
    name: str = ""
    type: int = 0


class UsersPage(Pagination):
    users: list[User] = Field(default_factory=list)


class GroupsPage(Pagination):
    groups: list[Group] = Field(default_factory=list)


class ContactGroupsPage(Pagination):
    groups: list[ContactGroup] = Field(default_factory=list)


class RolesList(BaseModel):
    roles: list[Role] = Field(default_factory=list)


class MembersPage(Pagination):
    members: list[User] = Field(default_factory=list)


class AdminsPage(Pagination):
    admins: list[User] = Field(default_factory=list)


class ContactGroupMembersPage(Pagination):
    group_members: list[ContactGroupMember] = Field(default_factory=list)


class UserCreationInfo(BaseModel):
    """User record sent when creating an account."""

    email: str
    first_name: str
    last_name: str
    display_name: str
    type: UserType = UserType.BASIC


class UserCreationBody(BaseModel):
    """Body of POST /users.

    `action` decides how the account is activated; `create` sends the user a
    confirmation e-mail containing the activation link.
    """

    action: ActionType = ActionType.CREATE
    user_info: UserCreationInfo


class UserCreationResponse(BaseModel):
    """Response of POST /users."""

    id: str
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    type: int = 0
