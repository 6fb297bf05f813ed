import asyncio
import sys
import os

# Add backend to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from friendship.config.redis import get_redis, close_redis
from friendship.config.settings import settings


async def reset_friends():
    keys = [
        settings.storage_key(settings.FRIENDS_KEY),
        settings.storage_key(settings.FRIEND_REQUESTS_KEY),
        settings.storage_key(settings.BLOCKED_USERS_KEY),
    ]
    print(f"🧹 Clearing friends data: {', '.join(keys)}")
    redis = await get_redis()
    removed = await redis.delete(*keys)
    print(f"✅ Removed {removed} key(s). Next load will show default data only.")
    await close_redis()

if __name__ == "__main__":
    asyncio.run(reset_friends())
