"""
Friends Service - Relationship state for the local user.

Encapsulates logic for:
- Sending/Accepting/Declining friend requests
- Removing friends, blocking and unblocking users
- Read-only queries used by the UI (search, counts)

Every mutation updates memory first so the UI sees the change
immediately, then waits for the durable write. A failed write is
re-raised and the in-memory change is kept (no rollback).
"""
import asyncio
import logging
import random
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, UTC
from typing import Awaitable, Callable, List, Optional, TypeVar

from friendship.config.constants import (
    CURRENT_USER_ID,
    PLACEHOLDER_EMAIL_DOMAIN,
    PLACEHOLDER_MAX_MUTUAL_FRIENDS,
    PLACEHOLDER_ONLINE_PROBABILITY,
    PLACEHOLDER_PHONE,
)
from friendship.config.settings import settings
from friendship.models import Friend, FriendRequest, RequestStatus, Tracked
from friendship.services.exceptions import FriendRequestNotFoundError
from friendship.services.metrics import operations_total
from friendship.services.reconciliation import ReconciliationEngine
from friendship.services.storage import DurableStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


def placeholder_email(name: str) -> str:
    """Guess an email for a new friend: first space becomes a dot."""
    return f"{name.lower().replace(' ', '.', 1)}@{PLACEHOLDER_EMAIL_DOMAIN}"


class FriendsProvider:
    """
    Owns the relationship state for one mounted UI scope.

    Mutations run one at a time behind a write lock and wait for the
    initial load, so each read-modify-write starts from the latest state.
    The busy flag is only a hint for the UI.
    """

    def __init__(
        self,
        store: DurableStore,
        engine: Optional[ReconciliationEngine] = None,
        rng: Optional[random.Random] = None,
        deduplicate_blocked: Optional[bool] = None,
    ):
        self.engine = engine or ReconciliationEngine(store)
        self.state = self.engine.initial_state()
        self.rng = rng or random.Random()
        if deduplicate_blocked is None:
            deduplicate_blocked = settings.DEDUPLICATE_BLOCKED_USERS
        self.deduplicate_blocked = deduplicate_blocked

        self._write_lock = asyncio.Lock()
        self._pending_operations = 0
        self._init_task: Optional[asyncio.Task] = None
        self._mounted = False

    # ==================== Lifecycle ====================

    @classmethod
    def mount(cls, store: DurableStore, **kwargs) -> "FriendsProvider":
        """
        Create a provider and start loading persisted data in the background.

        Must be called from a running event loop. Until loading finishes
        the provider exposes seed-only state.
        """
        provider = cls(store, **kwargs)
        provider._init_task = asyncio.create_task(provider.engine.load(provider.state))
        provider._mounted = True
        return provider

    @property
    def is_mounted(self) -> bool:
        return self._mounted

    async def wait_until_loaded(self) -> bool:
        """Wait for initialization. Returns False if loading fell back to seed data."""
        if self._init_task is None:
            return True
        if self._init_task.cancelled():
            return False
        try:
            return await asyncio.shield(self._init_task)
        except asyncio.CancelledError:
            # Load cancelled by unmount: callers carry on with seed data.
            # Cancellation of the caller itself still propagates.
            if self._init_task.cancelled():
                return False
            raise

    async def unmount(self):
        """Stop any pending initialization and detach from the UI scope."""
        self._mounted = False
        if self._init_task is not None and not self._init_task.done():
            self._init_task.cancel()
            try:
                await self._init_task
            except asyncio.CancelledError:
                logger.debug("Initial friends load cancelled on unmount")

    # ==================== State ====================

    @property
    def friends(self) -> List[Friend]:
        return self.state.friends

    @property
    def friend_requests(self) -> List[FriendRequest]:
        return self.state.friend_requests

    @property
    def blocked_users(self) -> List[str]:
        return list(self.state.blocked_users)

    @property
    def busy(self) -> bool:
        return self.state.busy

    is_loading = busy

    # ==================== Internals ====================

    @asynccontextmanager
    async def _operation(self, name: str, action: str):
        """
        Serialize a mutation, log and count failures.

        Busy is set on entry, before waiting for the load or the write lock,
        and stays set until the last queued mutation has finished.
        """
        self._pending_operations += 1
        self.state.busy = True
        try:
            await self.wait_until_loaded()
            async with self._write_lock:
                try:
                    yield
                except Exception as e:
                    operations_total.labels(operation=name, status="error").inc()
                    logger.error(f"Error {action}: {e}")
                    raise
                else:
                    operations_total.labels(operation=name, status="success").inc()
        finally:
            self._pending_operations -= 1
            self.state.busy = self._pending_operations > 0

    async def _commit(
        self,
        apply: Callable[[T], None],
        persist: Callable[[T], Awaitable[None]],
        value: T,
    ):
        """
        Apply a change in memory, then persist it.

        Memory is updated before the write starts and is left as-is if the
        write fails.
        """
        apply(value)
        await persist(value)

    async def _commit_friends(self, entries: List[Tracked[Friend]]):
        await self._commit(self.state.replace_friends, self.engine.save_friends, entries)

    async def _commit_requests(self, entries: List[Tracked[FriendRequest]]):
        await self._commit(self.state.replace_requests, self.engine.save_requests, entries)

    async def _commit_blocked(self, user_ids: List[str]):
        await self._commit(self.state.replace_blocked, self.engine.save_blocked, user_ids)

    @staticmethod
    def _warn_seed_removal(removed: List[Tracked], kind: str):
        for entry in removed:
            if entry.is_seed:
                logger.warning(
                    f"Removed default {kind} {entry.id} in memory only; "
                    f"it will reappear after reload"
                )

    def _build_friend(self, request: FriendRequest) -> Friend:
        return Friend(
            id=request.from_user_id,
            name=request.from_user_name,
            avatar=request.from_user_avatar,
            email=placeholder_email(request.from_user_name),
            phone=PLACEHOLDER_PHONE,
            is_online=self.rng.random() < PLACEHOLDER_ONLINE_PROBABILITY,
            last_seen=datetime.now(UTC),
            mutual_friends=self.rng.randrange(PLACEHOLDER_MAX_MUTUAL_FRIENDS),
        )

    # ==================== Mutations ====================

    async def send_friend_request(self, user_id: str, message: Optional[str] = None) -> FriendRequest:
        """Create a pending outgoing request to user_id. Duplicates are not checked."""
        async with self._operation("send_friend_request", "sending friend request"):
            request = FriendRequest(
                id=str(uuid.uuid4()),
                from_user_id=CURRENT_USER_ID,
                from_user_name=settings.LOCAL_USER_DISPLAY_NAME,
                to_user_id=user_id,
                message=message,
                status=RequestStatus.PENDING,
                created_at=datetime.now(UTC),
            )
            await self._commit_requests(self.state.request_entries + [Tracked.user(request)])
            logger.info(f"Friend request {request.id} sent to {user_id}")
            return request

    async def accept_friend_request(self, request_id: str) -> Friend:
        """
        Accept a request: add the sender as a friend and drop the request.

        Raises:
            FriendRequestNotFoundError: No request with this id. State is untouched.
        """
        async with self._operation("accept_friend_request", "accepting friend request"):
            request = next(
                (e.record for e in self.state.request_entries if e.id == request_id), None
            )
            if request is None:
                raise FriendRequestNotFoundError("Friend request not found")

            existing = next(
                (e.record for e in self.state.friend_entries if e.id == request.from_user_id), None
            )
            if existing is not None:
                # Friend ids stay unique; happens when a default request reappears after reload
                logger.warning(
                    f"User {request.from_user_id} is already a friend; "
                    f"dropping request {request_id} without adding a duplicate"
                )
                friend = existing
            else:
                friend = self._build_friend(request)
                await self._commit_friends(self.state.friend_entries + [Tracked.user(friend)])

            await self._commit_requests(
                [e for e in self.state.request_entries if e.id != request_id]
            )
            logger.info(f"Accepted friend request {request_id} from {friend.id}")
            return friend

    async def decline_friend_request(self, request_id: str):
        """Drop a request. Unknown ids are ignored."""
        async with self._operation("decline_friend_request", "declining friend request"):
            removed = [e for e in self.state.request_entries if e.id == request_id]
            self._warn_seed_removal(removed, "friend request")
            await self._commit_requests(
                [e for e in self.state.request_entries if e.id != request_id]
            )

    async def remove_friend(self, friend_id: str):
        """Unfriend. Unknown ids are ignored."""
        async with self._operation("remove_friend", "removing friend"):
            removed = [e for e in self.state.friend_entries if e.id == friend_id]
            self._warn_seed_removal(removed, "friend")
            await self._commit_friends(
                [e for e in self.state.friend_entries if e.id != friend_id]
            )

    async def block_user(self, user_id: str):
        """
        Block a user and drop them from friends.

        Two separate writes: blocked users first, then friends. If the
        second fails the block is already stored.
        """
        async with self._operation("block_user", "blocking user"):
            blocked = self.state.blocked_users
            if self.deduplicate_blocked and user_id in blocked:
                logger.debug(f"User {user_id} already blocked")
                updated_blocked = list(blocked)
            else:
                updated_blocked = blocked + [user_id]
            await self._commit_blocked(updated_blocked)

            removed = [e for e in self.state.friend_entries if e.id == user_id]
            self._warn_seed_removal(removed, "friend")
            await self._commit_friends(
                [e for e in self.state.friend_entries if e.id != user_id]
            )
            logger.info(f"Blocked user {user_id}")

    async def unblock_user(self, user_id: str):
        """Remove every occurrence of user_id from blocked users. Friendship is not restored."""
        async with self._operation("unblock_user", "unblocking user"):
            await self._commit_blocked(
                [uid for uid in self.state.blocked_users if uid != user_id]
            )
            logger.info(f"Unblocked user {user_id}")

    # ==================== Queries ====================

    def search_friends(self, query: str) -> List[Friend]:
        """Case-insensitive substring match on name or email."""
        needle = query.lower()
        return [
            f for f in self.state.friends
            if needle in f.name.lower() or needle in f.email.lower()
        ]

    def get_pending_requests_count(self) -> int:
        """Pending requests addressed to the local user."""
        return sum(
            1 for r in self.state.friend_requests
            if r.is_pending and r.to_user_id == CURRENT_USER_ID
        )

    def get_sent_requests_count(self) -> int:
        """Pending requests sent by the local user."""
        return sum(
            1 for r in self.state.friend_requests
            if r.is_pending and r.from_user_id == CURRENT_USER_ID
        )

    def get_friends_count(self) -> int:
        return len(self.state.friend_entries)

    def get_blocked_users(self) -> List[str]:
        return list(self.state.blocked_users)
