"""
Application-wide constants for the friends state core.

This file centralizes fixed identities and placeholder values used when
building records locally, so they stay consistent across modules.

Note: Environment-dependent settings (Redis, storage keys) belong in settings.py.
This file is for values that never change between environments.
"""

# ==============================================================================
# LOCAL USER
# ==============================================================================

# The single identity this client always acts as
CURRENT_USER_ID: str = "current-user"

# ==============================================================================
# ACCEPTED FRIEND PLACEHOLDERS
# ==============================================================================

# There is no backend to look up a new friend's contact details, so accepted
# requests get a guessed email and a fixed phone number
PLACEHOLDER_EMAIL_DOMAIN: str = "example.com"
PLACEHOLDER_PHONE: str = "+218-90-000-0000"

# Upper bound (exclusive) for the random mutual friend count
PLACEHOLDER_MAX_MUTUAL_FRIENDS: int = 10

# Probability that a newly accepted friend is shown as online
PLACEHOLDER_ONLINE_PROBABILITY: float = 0.5

# ==============================================================================
# SERIALIZATION
# ==============================================================================

# Persisted blobs are JSON arrays; keep non-ASCII names readable
JSON_ENSURE_ASCII: bool = False
