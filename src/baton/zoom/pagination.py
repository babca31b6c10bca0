"""Pagination token encoding.

A token is an opaque string the platform hands back on the next call. It
serializes a stack of page states, one frame per resource type being walked,
so a single token can carry nested listings (e.g. members of a resource listed
while the parent listing is still in progress).

    {"states": [<older frames>], "current_state": <active frame>}

An empty token means "start from the beginning" on input and "no more pages"
on output.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from baton.zoom.errors import MalformedCursorError
from baton.zoom.models import ResourceId


class PageState(BaseModel):
    """Pagination frame scoped to one resource type."""

    model_config = ConfigDict(extra="forbid")

    resource_type_id: str
    resource_id: str = ""
    token: str = ""


class Bag(BaseModel):
    """Stack of page states."""

    model_config = ConfigDict(extra="forbid")

    states: list[PageState] = Field(default_factory=list)
    current_state: PageState | None = None

    def current(self) -> PageState | None:
        return self.current_state

    def push(self, state: PageState) -> None:
        if self.current_state is not None:
            self.states.append(self.current_state)
        self.current_state = state

    def pop(self) -> PageState | None:
        ret = self.current_state
        if ret is None:
            return None
        self.current_state = self.states.pop() if self.states else None
        return ret

    def page_token(self) -> str:
        """Upstream page token of the active frame."""
        if self.current_state is None:
            return ""
        return self.current_state.token

    def next(self, page_token: str) -> None:
        """Advance the active frame, dropping it when the listing is exhausted."""
        state = self.pop()
        if state is None:
            raise MalformedCursorError("no active page state")
        if page_token:
            self.push(state.model_copy(update={"token": page_token}))

    def next_token(self, page_token: str) -> str:
        self.next(page_token)
        return self.marshal()

    def marshal(self) -> str:
        if self.current_state is None:
            return ""
        return self.model_dump_json()

    @classmethod
    def unmarshal(cls, token: str) -> "Bag":
        if not token:
            return cls()
        try:
            bag = cls.model_validate_json(token)
        except ValidationError as e:
            raise MalformedCursorError(f"invalid pagination token: {e}") from e
        # marshal never emits a token without an active frame
        if bag.current_state is None:
            raise MalformedCursorError("invalid pagination token: no active page state")
        return bag


def parse_page_token(token: str, resource_id: ResourceId) -> tuple[Bag, str]:
    """Recover the bag and upstream page for a listing of `resource_id`.

    Pushes a frame for the listed resource type unless one is already active;
    frames belonging to other types stay untouched below it.
    """
    bag = Bag.unmarshal(token)

    current = bag.current()
    if current is None or current.resource_type_id != resource_id.resource_type:
        bag.push(
            PageState(
                resource_type_id=resource_id.resource_type,
                resource_id=resource_id.resource,
            )
        )

    return bag, bag.page_token()
