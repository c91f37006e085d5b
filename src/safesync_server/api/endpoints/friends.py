# src/safesync_server/api/endpoints/friends.py
"""Friend request and friendship endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Query

from safesync_server.api.dependencies import FriendshipServiceDep, SessionClaimsDep, ensure_actor
from safesync_server.schemas.common import StatusResponse
from safesync_server.schemas.friends import (
    FriendRequestPayload,
    FriendRequestResponse,
    RelationshipResponse,
    RemoveFriendPayload,
)
from safesync_server.schemas.user import UserResponse

router = APIRouter(tags=["friends"])


@router.post("/send_friend_request", response_model=StatusResponse)
def send_friend_request(
    payload: FriendRequestPayload,
    friendships: FriendshipServiceDep,
    claims: SessionClaimsDep,
) -> StatusResponse:
    """Ask ``receiver_username`` to become friends with ``sender_username``."""
    ensure_actor(claims, payload.sender_username)
    friendships.send_request(payload.sender_username, payload.receiver_username)
    return StatusResponse(status="Friend request sent")


# Older mobile clients post here instead of /send_friend_request.
router.add_api_route(
    "/add_friend",
    send_friend_request,
    methods=["POST"],
    response_model=StatusResponse,
    include_in_schema=False,
)


@router.post("/accept_friend_request", response_model=StatusResponse)
def accept_friend_request(
    payload: FriendRequestPayload,
    friendships: FriendshipServiceDep,
    claims: SessionClaimsDep,
) -> StatusResponse:
    """Accept a pending request; only the receiver may do this."""
    ensure_actor(claims, payload.receiver_username)
    friendships.accept_request(payload.sender_username, payload.receiver_username)
    return StatusResponse(status="Friend request accepted")


@router.post("/decline_friend_request", response_model=StatusResponse)
def decline_friend_request(
    payload: FriendRequestPayload,
    friendships: FriendshipServiceDep,
    claims: SessionClaimsDep,
) -> StatusResponse:
    """Decline a pending request; only the receiver may do this."""
    ensure_actor(claims, payload.receiver_username)
    friendships.decline_request(payload.sender_username, payload.receiver_username)
    return StatusResponse(status="Friend request declined")


@router.get("/pending_friend_requests", response_model=list[FriendRequestResponse])
def get_pending_friend_requests(
    friendships: FriendshipServiceDep,
    username: str = Query(""),
) -> list[FriendRequestResponse]:
    """List requests waiting for ``username`` to answer."""
    return [
        FriendRequestResponse.model_validate(request)
        for request in friendships.list_pending(username)
    ]


@router.get("/outgoing_friend_requests", response_model=list[FriendRequestResponse])
def get_outgoing_friend_requests(
    friendships: FriendshipServiceDep,
    username: str = Query(""),
) -> list[FriendRequestResponse]:
    """List requests ``username`` has sent that are still pending."""
    return [
        FriendRequestResponse.model_validate(request)
        for request in friendships.list_outgoing(username)
    ]


@router.post("/remove_friend", response_model=StatusResponse)
def remove_friend(
    payload: RemoveFriendPayload,
    friendships: FriendshipServiceDep,
    claims: SessionClaimsDep,
) -> StatusResponse:
    """End a friendship in both directions. Succeeds if there was none."""
    ensure_actor(claims, payload.username)
    friendships.remove_friendship(payload.username, payload.friend_username)
    return StatusResponse(status="Friend removed")


@router.get("/friends", response_model=list[UserResponse])
def get_friends(
    friendships: FriendshipServiceDep,
    username: str = Query(""),
) -> list[UserResponse]:
    """Return the friends of ``username`` (empty when there are none)."""
    return [UserResponse.from_user(user) for user in friendships.list_friends(username)]


@router.get("/relationship", response_model=RelationshipResponse)
def get_relationship(
    friendships: FriendshipServiceDep,
    username: str = Query(""),
    other: str = Query(""),
) -> RelationshipResponse:
    """Report how ``username`` relates to ``other``."""
    state = friendships.relationship_state(username, other)
    return RelationshipResponse(username=username, other=other, state=state)
