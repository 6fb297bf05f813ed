from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    # Redis (durable store backend)
    REDIS_HOST: str = Field("localhost")
    REDIS_PORT: int = Field(6379)
    REDIS_PASSWORD: str | None = Field(None)
    REDIS_DB: int = Field(0)

    # Durable store keys
    STORAGE_KEY_PREFIX: str = Field("")
    FRIENDS_KEY: str = Field("friends")
    FRIEND_REQUESTS_KEY: str = Field("friendRequests")
    BLOCKED_USERS_KEY: str = Field("blockedUsers")

    # Local user
    LOCAL_USER_DISPLAY_NAME: str = Field("أنت")

    # Behaviour
    # False keeps list semantics (blocking twice stores the id twice),
    # True treats blocked users as a set.
    DEDUPLICATE_BLOCKED_USERS: bool = Field(False)

    # App
    LOG_LEVEL: str = Field("INFO")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        env_file_encoding="utf-8"
    )

    def storage_key(self, name: str) -> str:
        """Apply the configured prefix to a durable store key."""
        return f"{self.STORAGE_KEY_PREFIX}{name}"


settings = Settings()
