"""
Friends State Core

Local relationship graph (friends, pending requests, blocked users) for the
single logged-in user of a client device. Seed demo content is merged with
user-created records in memory; only the user records are persisted.
"""

from friendship.models import Friend, FriendRequest, RequestStatus, RecordOrigin
from friendship.services.exceptions import (
    FriendsError,
    FriendRequestNotFoundError,
    StorageError,
    ProviderNotActiveError,
)
from friendship.services.friends_service import FriendsProvider
from friendship.services.provider import friends_provider, use_friends
from friendship.services.storage import DurableStore, RedisDurableStore

__all__ = [
    "Friend",
    "FriendRequest",
    "RequestStatus",
    "RecordOrigin",
    "FriendsError",
    "FriendRequestNotFoundError",
    "StorageError",
    "ProviderNotActiveError",
    "FriendsProvider",
    "friends_provider",
    "use_friends",
    "DurableStore",
    "RedisDurableStore",
]
