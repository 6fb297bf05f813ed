"""
Relationship State Store - the in-memory collections behind the provider.

Holds friends and requests as origin-tagged entries, the blocked-user ids
and the advisory busy flag. Collections are replaced wholesale on every
change (never mutated in place), so a snapshot taken by a reader stays
stable while a write is in flight.
"""
import logging
from dataclasses import dataclass, field
from typing import List

from friendship.models import Friend, FriendRequest, Tracked
from friendship.services.metrics import collection_size
from friendship.services.seed import seed_friend_entries, seed_request_entries

logger = logging.getLogger(__name__)


@dataclass
class RelationshipState:
    """
    In-memory relationship collections for the local user.

    Attributes:
        friend_entries: Friends tagged with their origin, display order
        request_entries: Requests tagged with their origin, display order
        blocked_users: Blocked user ids, in the order they were blocked
        busy: True while a mutation is in progress (UI hint only)
    """

    friend_entries: List[Tracked[Friend]] = field(default_factory=seed_friend_entries)
    request_entries: List[Tracked[FriendRequest]] = field(default_factory=seed_request_entries)
    blocked_users: List[str] = field(default_factory=list)
    busy: bool = False

    @property
    def friends(self) -> List[Friend]:
        return [entry.record for entry in self.friend_entries]

    @property
    def friend_requests(self) -> List[FriendRequest]:
        return [entry.record for entry in self.request_entries]

    def replace_friends(self, entries: List[Tracked[Friend]]):
        self.friend_entries = list(entries)
        collection_size.labels(collection="friends").set(len(self.friend_entries))

    def replace_requests(self, entries: List[Tracked[FriendRequest]]):
        self.request_entries = list(entries)
        collection_size.labels(collection="requests").set(len(self.request_entries))

    def replace_blocked(self, user_ids: List[str]):
        self.blocked_users = list(user_ids)
        collection_size.labels(collection="blocked").set(len(self.blocked_users))
