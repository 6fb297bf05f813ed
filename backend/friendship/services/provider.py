"""
Provider scope for the friends state.

There is no global provider. The owning UI scope creates one with
friends_provider() and passes it down to the components that need it;
use_friends() checks that the handle they received is live.

Usage:
    store = await RedisDurableStore.connect()
    async with friends_provider(store) as provider:
        friends = use_friends(provider)
        await friends.block_user("7")
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from friendship.services.exceptions import ProviderNotActiveError
from friendship.services.friends_service import FriendsProvider
from friendship.services.storage import DurableStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def friends_provider(store: DurableStore, **kwargs) -> AsyncIterator[FriendsProvider]:
    """Mount a FriendsProvider for the duration of the block."""
    provider = FriendsProvider.mount(store, **kwargs)
    logger.debug("Friends provider mounted")
    try:
        yield provider
    finally:
        await provider.unmount()
        logger.debug("Friends provider unmounted")


def use_friends(provider: Optional[FriendsProvider]) -> FriendsProvider:
    """
    Return the provider if it is mounted.

    Raises:
        ProviderNotActiveError: provider is None or has been unmounted
    """
    if provider is None or not provider.is_mounted:
        raise ProviderNotActiveError("use_friends must be used within a FriendsProvider")
    return provider
