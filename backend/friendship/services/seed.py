"""
Seed data for the friends state.

These records are always present in memory as demo content and are never
written to the durable store. Timestamps are relative to the moment the
seed is built, so each mount shows fresh "last seen" values.
"""
from datetime import datetime, timedelta, UTC
from typing import List, Optional

from friendship.config.constants import CURRENT_USER_ID
from friendship.models import Friend, FriendRequest, RequestStatus, Tracked


def create_seed_friends(now: Optional[datetime] = None) -> List[Friend]:
    """Build the default friends list."""
    now = now or datetime.now(UTC)
    return [
        Friend(
            id="1",
            name="أحمد محمد",
            avatar="https://images.pexels.com/photos/220453/pexels-photo-220453.jpeg",
            email="ahmed@example.com",
            phone="+218-91-123-4567",
            is_online=True,
            last_seen=now,
            mutual_friends=5,
        ),
        Friend(
            id="2",
            name="فاطمة علي",
            avatar="https://images.pexels.com/photos/415829/pexels-photo-415829.jpeg",
            email="fatima@example.com",
            phone="+218-92-234-5678",
            is_online=False,
            last_seen=now - timedelta(hours=2),
            mutual_friends=3,
        ),
        Friend(
            id="3",
            name="محمد الصادق",
            avatar="https://images.pexels.com/photos/1222271/pexels-photo-1222271.jpeg",
            email="mohamed@example.com",
            phone="+218-93-345-6789",
            is_online=True,
            last_seen=now,
            mutual_friends=8,
        ),
        Friend(
            id="4",
            name="عائشة حسن",
            avatar="https://images.pexels.com/photos/1130626/pexels-photo-1130626.jpeg",
            email="aisha@example.com",
            phone="+218-94-456-7890",
            is_online=False,
            last_seen=now - timedelta(days=1),
            mutual_friends=2,
        ),
    ]


def create_seed_requests(now: Optional[datetime] = None) -> List[FriendRequest]:
    """Build the default incoming requests."""
    now = now or datetime.now(UTC)
    return [
        FriendRequest(
            id="1",
            from_user_id="5",
            from_user_name="سارة أحمد",
            from_user_avatar="https://images.pexels.com/photos/1130626/pexels-photo-1130626.jpeg",
            to_user_id=CURRENT_USER_ID,
            message="مرحباً! أود إضافتك كصديق",
            status=RequestStatus.PENDING,
            created_at=now - timedelta(minutes=30),
        ),
        FriendRequest(
            id="2",
            from_user_id="6",
            from_user_name="خالد محمود",
            from_user_avatar="https://images.pexels.com/photos/1043471/pexels-photo-1043471.jpeg",
            to_user_id=CURRENT_USER_ID,
            status=RequestStatus.PENDING,
            created_at=now - timedelta(hours=2),
        ),
    ]


def seed_friend_entries(now: Optional[datetime] = None) -> List[Tracked[Friend]]:
    return [Tracked.seed(f) for f in create_seed_friends(now)]


def seed_request_entries(now: Optional[datetime] = None) -> List[Tracked[FriendRequest]]:
    return [Tracked.seed(r) for r in create_seed_requests(now)]
