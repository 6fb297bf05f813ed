"""
Friend Models - Relationship records held by the friends state store.

Records are serialized with camelCase field names so persisted blobs keep the
same shape the client has always written:

    {"id": "7", "name": "...", "isOnline": true, "lastSeen": "2024-...", ...}
"""
from dataclasses import dataclass
from datetime import datetime, UTC
from enum import Enum
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RequestStatus(str, Enum):
    """Lifecycle states of a friend request."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"


class RecordOrigin(str, Enum):
    """Where an in-memory record came from."""
    SEED = "seed"    # Built-in demo content, never persisted
    USER = "user"    # Created by the local user or loaded from the store


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_wire(self) -> dict:
        """Dump as a JSON-ready dict using the persisted field names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Friend(_WireModel):
    """A confirmed friend of the local user."""
    id: str
    name: str
    avatar: Optional[str] = None
    email: str
    phone: str
    is_online: bool = False
    last_seen: datetime = Field(default_factory=lambda: datetime.now(UTC))
    mutual_friends: int = Field(0, ge=0)  # Display only


class FriendRequest(_WireModel):
    """A relationship request, incoming or outgoing."""
    id: str
    from_user_id: str
    from_user_name: str
    from_user_avatar: Optional[str] = None
    to_user_id: str
    message: Optional[str] = None
    status: RequestStatus = RequestStatus.PENDING
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_pending(self) -> bool:
        return self.status == RequestStatus.PENDING


RecordT = TypeVar("RecordT", Friend, FriendRequest)


@dataclass(frozen=True)
class Tracked(Generic[RecordT]):
    """
    A record tagged with its origin.

    The persisted subset of a collection is every USER-tagged entry, so a
    user record that happens to share an id with a seed record is still
    written back.
    """
    origin: RecordOrigin
    record: RecordT

    @property
    def id(self) -> str:
        return self.record.id

    @property
    def is_seed(self) -> bool:
        return self.origin == RecordOrigin.SEED

    @classmethod
    def seed(cls, record: RecordT) -> "Tracked[RecordT]":
        return cls(origin=RecordOrigin.SEED, record=record)

    @classmethod
    def user(cls, record: RecordT) -> "Tracked[RecordT]":
        return cls(origin=RecordOrigin.USER, record=record)
