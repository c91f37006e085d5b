"""Friend request and friendship schemas."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from safesync_server.services.friendship import RelationshipState


class FriendRequestPayload(BaseModel):
    """Ordered pair naming a friend request."""

    sender_username: str = Field(..., description="User who made the request")
    receiver_username: str = Field(..., description="User the request is addressed to")


class RemoveFriendPayload(BaseModel):
    """Pair of users whose friendship should end."""

    username: str = Field(..., description="Acting user")
    friend_username: str = Field(
        ...,
        validation_alias=AliasChoices("friend_username", "friendUsername"),
        description="Friend to remove",
    )


class FriendRequestResponse(BaseModel):
    """A pending friend request."""

    id: int
    sender_username: str
    receiver_username: str
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class RelationshipResponse(BaseModel):
    """Relationship between ``username`` and ``other`` as seen by ``username``."""

    username: str
    other: str
    state: RelationshipState
