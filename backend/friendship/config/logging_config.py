import logging

from friendship.config.settings import settings


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for scripts and embedding applications."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
