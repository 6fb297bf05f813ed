import asyncio
import json
from datetime import datetime, UTC
from typing import Dict, Optional

from friendship.config.constants import CURRENT_USER_ID
from friendship.services.exceptions import StorageError


def friend_payload(friend_id: str, name: str = "Test Friend", email: Optional[str] = None) -> dict:
    # Persisted wire shape (camelCase)
    return {
        "id": friend_id,
        "name": name,
        "email": email or f"{friend_id}@example.com",
        "phone": "+218-90-111-2222",
        "isOnline": False,
        "lastSeen": datetime(2024, 1, 1, tzinfo=UTC).isoformat(),
        "mutualFriends": 1,
    }


def request_payload(request_id: str, from_user_id: str, to_user_id: str = CURRENT_USER_ID, name: str = "Sender") -> dict:
    return {
        "id": request_id,
        "fromUserId": from_user_id,
        "fromUserName": name,
        "toUserId": to_user_id,
        "status": "pending",
        "createdAt": datetime(2024, 1, 1, tzinfo=UTC).isoformat(),
    }


def dumps(records) -> str:
    return json.dumps(records, ensure_ascii=False)


class GatedStore:
    """
    DurableStore stand-in whose writes block until released.

    Lets tests observe state while a mutation is waiting on persistence.
    """

    def __init__(self, fail_writes: bool = False):
        self.data: Dict[str, str] = {}
        self.gate = asyncio.Event()
        self.write_started = asyncio.Event()
        self.fail_writes = fail_writes

    async def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.write_started.set()
        await self.gate.wait()
        if self.fail_writes:
            raise StorageError(f"Failed to write {key}")
        self.data[key] = value
