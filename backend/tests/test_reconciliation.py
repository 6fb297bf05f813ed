"""
Tests for the seed/user merge on load and the user-only filter on save.
"""
import json
import pytest
from unittest.mock import AsyncMock

from friendship.models import Friend, Tracked
from friendship.services.exceptions import StorageError
from friendship.services.reconciliation import ReconciliationEngine
from friendship.services.seed import create_seed_friends, create_seed_requests
from tests.helpers import dumps, friend_payload, request_payload

SEED_FRIEND_IDS = [f.id for f in create_seed_friends()]
SEED_REQUEST_IDS = [r.id for r in create_seed_requests()]


@pytest.mark.asyncio
async def test_initial_state_is_seed_only(store):
    state = ReconciliationEngine(store).initial_state()
    assert [f.id for f in state.friends] == SEED_FRIEND_IDS
    assert [r.id for r in state.friend_requests] == SEED_REQUEST_IDS
    assert state.blocked_users == []
    assert state.busy is False


@pytest.mark.asyncio
async def test_load_appends_persisted_friends_after_seed(store):
    await store.set("friends", dumps([friend_payload("99", name="Omar")]))
    engine = ReconciliationEngine(store)
    state = engine.initial_state()

    assert await engine.load(state) is True

    assert [f.id for f in state.friends] == SEED_FRIEND_IDS + ["99"]
    assert state.friend_entries[-1].is_seed is False
    assert all(e.is_seed for e in state.friend_entries[:-1])


@pytest.mark.asyncio
async def test_load_merges_requests_and_replaces_blocked(store):
    await store.set("friendRequests", dumps([request_payload("r9", "current-user", to_user_id="42")]))
    await store.set("blockedUsers", dumps(["7", "8"]))
    engine = ReconciliationEngine(store)
    state = engine.initial_state()

    await engine.load(state)

    assert [r.id for r in state.friend_requests] == SEED_REQUEST_IDS + ["r9"]
    assert state.blocked_users == ["7", "8"]
    # No stored friends key: seed only
    assert [f.id for f in state.friends] == SEED_FRIEND_IDS


@pytest.mark.asyncio
async def test_load_empty_array_keeps_seed(store):
    await store.set("friends", "[]")
    engine = ReconciliationEngine(store)
    state = engine.initial_state()

    assert await engine.load(state) is True
    assert [f.id for f in state.friends] == SEED_FRIEND_IDS


@pytest.mark.asyncio
@pytest.mark.parametrize("raw", ["not json", '{"id": "1"}', '[{"id": "99"}]'])
async def test_load_bad_payload_falls_back_to_seed(store, raw):
    await store.set("friends", raw)
    engine = ReconciliationEngine(store)
    state = engine.initial_state()

    assert await engine.load(state) is False
    assert [f.id for f in state.friends] == SEED_FRIEND_IDS


@pytest.mark.asyncio
async def test_load_failure_applies_nothing(store):
    # Friends are valid, blocked users are not: neither is applied
    await store.set("friends", dumps([friend_payload("99")]))
    await store.set("blockedUsers", "[1, {}]")
    engine = ReconciliationEngine(store)
    state = engine.initial_state()

    assert await engine.load(state) is False
    assert [f.id for f in state.friends] == SEED_FRIEND_IDS
    assert state.blocked_users == []


@pytest.mark.asyncio
async def test_load_io_failure_is_swallowed():
    failing = AsyncMock()
    failing.get.side_effect = StorageError("Failed to read friends")
    engine = ReconciliationEngine(failing)
    state = engine.initial_state()

    assert await engine.load(state) is False
    assert [f.id for f in state.friends] == SEED_FRIEND_IDS


@pytest.mark.asyncio
async def test_save_right_after_load_writes_empty_array(store):
    engine = ReconciliationEngine(store)
    state = engine.initial_state()
    await engine.load(state)

    await engine.save_friends(state.friend_entries)
    await engine.save_requests(state.request_entries)

    assert json.loads(await store.get("friends")) == []
    assert json.loads(await store.get("friendRequests")) == []


@pytest.mark.asyncio
async def test_save_writes_only_user_records(store):
    await store.set("friends", dumps([friend_payload("99")]))
    engine = ReconciliationEngine(store)
    state = engine.initial_state()
    await engine.load(state)

    await engine.save_friends(state.friend_entries)

    saved = json.loads(await store.get("friends"))
    assert [f["id"] for f in saved] == ["99"]
    assert not set(SEED_FRIEND_IDS) & {f["id"] for f in saved}


@pytest.mark.asyncio
async def test_user_record_sharing_seed_id_is_persisted(store):
    engine = ReconciliationEngine(store)
    clash = Friend.model_validate(friend_payload("1", name="Another One"))

    await engine.save_friends(engine.seed_friends + [Tracked.user(clash)])

    saved = json.loads(await store.get("friends"))
    assert [f["name"] for f in saved] == ["Another One"]


@pytest.mark.asyncio
async def test_save_blocked_writes_full_list(store):
    engine = ReconciliationEngine(store)
    await engine.save_blocked(["7", "7", "8"])
    assert json.loads(await store.get("blockedUsers")) == ["7", "7", "8"]


@pytest.mark.asyncio
async def test_save_failure_is_raised():
    failing = AsyncMock()
    failing.set.side_effect = StorageError("Failed to write friends")
    engine = ReconciliationEngine(failing)

    with pytest.raises(StorageError):
        await engine.save_friends(engine.seed_friends)


@pytest.mark.asyncio
async def test_storage_keys_follow_settings(store, monkeypatch):
    from friendship.config.settings import settings
    monkeypatch.setattr(settings, "STORAGE_KEY_PREFIX", "dev:")
    engine = ReconciliationEngine(store)

    await engine.save_blocked(["7"])

    assert engine.blocked_key == "dev:blockedUsers"
    assert await store.get("dev:blockedUsers") == '["7"]'


@pytest.mark.asyncio
async def test_load_empty_blob_counts_as_absent(store):
    await store.set("friends", "")
    await store.set("blockedUsers", dumps(["7"]))
    engine = ReconciliationEngine(store)
    state = engine.initial_state()

    assert await engine.load(state) is True
    assert [f.id for f in state.friends] == SEED_FRIEND_IDS
    assert state.blocked_users == ["7"]
