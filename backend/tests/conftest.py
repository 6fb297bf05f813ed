import sys
import pytest
from pathlib import Path

# Add project root (2 levels up from tests/) to sys.path so tests can import 'friendship'
root = Path(__file__).resolve().parents[1]
if str(root) not in sys.path:
    sys.path.insert(0, str(root))


import fakeredis

from friendship.services.friends_service import FriendsProvider
from friendship.services.storage import RedisDurableStore


@pytest.fixture
def fake_redis():
    """A fresh in-memory Redis per test, decoding values to str like the real client."""
    return fakeredis.FakeAsyncRedis(server=fakeredis.FakeServer(), decode_responses=True)


@pytest.fixture
def store(fake_redis):
    return RedisDurableStore(fake_redis)


@pytest.fixture
async def provider(store):
    """A mounted provider whose initial load has completed."""
    p = FriendsProvider.mount(store)
    await p.wait_until_loaded()
    yield p
    await p.unmount()
