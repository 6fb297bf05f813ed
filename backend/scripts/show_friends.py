import asyncio
import sys
import os

# Add backend to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from friendship.config.logging_config import configure_logging
from friendship.config.redis import close_redis
from friendship.services.provider import friends_provider, use_friends
from friendship.services.storage import RedisDurableStore


async def show_friends():
    configure_logging()
    store = await RedisDurableStore.connect()

    async with friends_provider(store) as provider:
        friends = use_friends(provider)
        if not await friends.wait_until_loaded():
            print("⚠️ Could not read stored data, showing defaults")

        print(f"👥 Friends ({friends.get_friends_count()}):")
        for f in friends.friends:
            status = "online" if f.is_online else f"last seen {f.last_seen.isoformat()}"
            print(f"  - [{f.id}] {f.name} <{f.email}> {status}")

        print(f"📥 Incoming requests: {friends.get_pending_requests_count()}")
        print(f"📤 Sent requests: {friends.get_sent_requests_count()}")
        print(f"🚫 Blocked: {', '.join(friends.get_blocked_users()) or '-'}")

    await close_redis()

if __name__ == "__main__":
    asyncio.run(show_friends())
