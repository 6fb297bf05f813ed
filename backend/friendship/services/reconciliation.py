"""
Reconciliation Engine - merges seed and persisted records.

Load: persisted user records are appended after the seed records to form
the working collections. Save: only user-origin records are written back,
so seed content never ends up in the durable store.

Only additions are durable. Removing a seed record (unfriend, block,
decline) changes memory but not the store, and the record comes back on
the next load.

Usage:
    engine = ReconciliationEngine(store)
    state = engine.initial_state()
    await engine.load(state)            # never raises
    await engine.save_friends(state.friend_entries)
"""
import asyncio
import json
import logging
from typing import List, Optional, Type

from pydantic import TypeAdapter

from friendship.config.constants import JSON_ENSURE_ASCII
from friendship.config.settings import settings
from friendship.models import Friend, FriendRequest, RecordT, Tracked
from friendship.services.metrics import load_failures
from friendship.services.seed import seed_friend_entries, seed_request_entries
from friendship.services.state import RelationshipState
from friendship.services.storage import DurableStore

logger = logging.getLogger(__name__)

_blocked_adapter = TypeAdapter(List[str])


def _parse_records(raw: str, model: Type[RecordT]) -> List[Tracked[RecordT]]:
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array of {model.__name__} records")
    return [Tracked.user(model.model_validate(item)) for item in data]


def _dump_records(entries: List[Tracked]) -> str:
    return json.dumps(
        [entry.record.to_wire() for entry in entries if not entry.is_seed],
        ensure_ascii=JSON_ENSURE_ASCII,
    )


class ReconciliationEngine:
    """
    Reads and writes the user subset of the relationship collections.

    Args:
        store: Durable store adapter
        friends_key / requests_key / blocked_key: Storage keys, defaulting
            to the configured names
    """

    def __init__(
        self,
        store: DurableStore,
        friends_key: Optional[str] = None,
        requests_key: Optional[str] = None,
        blocked_key: Optional[str] = None,
    ):
        self.store = store
        self.friends_key = friends_key or settings.storage_key(settings.FRIENDS_KEY)
        self.requests_key = requests_key or settings.storage_key(settings.FRIEND_REQUESTS_KEY)
        self.blocked_key = blocked_key or settings.storage_key(settings.BLOCKED_USERS_KEY)
        self.seed_friends = seed_friend_entries()
        self.seed_requests = seed_request_entries()

    def initial_state(self) -> RelationshipState:
        """State before load: seed collections, nothing blocked, not busy."""
        return RelationshipState(
            friend_entries=list(self.seed_friends),
            request_entries=list(self.seed_requests),
        )

    async def load(self, state: RelationshipState) -> bool:
        """
        Merge persisted records into state.

        The three keys are read concurrently. Nothing is applied unless all
        reads and parses succeed, so a failure leaves the state exactly as
        it was.

        Returns:
            True if persisted data was read, False if loading failed
        """
        try:
            stored_friends, stored_requests, stored_blocked = await asyncio.gather(
                self.store.get(self.friends_key),
                self.store.get(self.requests_key),
                self.store.get(self.blocked_key),
            )

            # An empty blob counts as never written
            friends = requests = blocked = None
            if stored_friends:
                friends = self.seed_friends + _parse_records(stored_friends, Friend)
            if stored_requests:
                requests = self.seed_requests + _parse_records(stored_requests, FriendRequest)
            if stored_blocked:
                blocked = _blocked_adapter.validate_json(stored_blocked)
        except Exception as e:
            load_failures.inc()
            logger.error(f"Error loading friends data: {e}")
            return False

        if friends is not None:
            state.replace_friends(friends)
        if requests is not None:
            state.replace_requests(requests)
        if blocked is not None:
            state.replace_blocked(blocked)

        logger.info(
            f"Loaded friends state: {len(state.friend_entries)} friends, "
            f"{len(state.request_entries)} requests, {len(state.blocked_users)} blocked"
        )
        return True

    async def save_friends(self, entries: List[Tracked[Friend]]):
        """Persist user-added friends. Raises on store failure."""
        try:
            await self.store.set(self.friends_key, _dump_records(entries))
        except Exception as e:
            logger.error(f"Error saving friends data: {e}")
            raise

    async def save_requests(self, entries: List[Tracked[FriendRequest]]):
        """Persist user-added requests. Raises on store failure."""
        try:
            await self.store.set(self.requests_key, _dump_records(entries))
        except Exception as e:
            logger.error(f"Error saving friend requests: {e}")
            raise

    async def save_blocked(self, user_ids: List[str]):
        """Persist the full blocked list. Raises on store failure."""
        try:
            await self.store.set(
                self.blocked_key, json.dumps(list(user_ids), ensure_ascii=JSON_ENSURE_ASCII)
            )
        except Exception as e:
            logger.error(f"Error saving blocked users: {e}")
            raise
