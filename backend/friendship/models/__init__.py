"""
Models Package

Pydantic records for the friends state core:
1. Friend - confirmed friends of the local user
2. FriendRequest - pending incoming/outgoing requests
3. Tracked - a record tagged with its seed/user origin
"""

from .friend import (
    Friend,
    FriendRequest,
    RequestStatus,
    RecordOrigin,
    RecordT,
    Tracked,
)

__all__ = [
    "Friend",
    "FriendRequest",
    "RequestStatus",
    "RecordOrigin",
    "RecordT",
    "Tracked",
]
