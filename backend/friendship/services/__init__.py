"""Business Logic Services.

This package contains the service modules that implement the friends
state core.

Service Categories:
- Storage: durable store protocol and Redis adapter
- Seed: built-in demo friends and requests
- State: in-memory tagged collections and busy flag
- Reconciliation: seed/user merge on load, user-only filter on save
- Friends: mutations and queries exposed to the UI
- Provider: mount/unmount scope and fail-fast accessor
"""
