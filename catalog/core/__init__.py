"""
Core utilities shared across the catalog service.

This package hosts configuration (env vars, paths, storage backend), logging
setup and small helpers (timestamps, canonical ids). Repositories, services
and routers depend on these primitives instead of reading os.environ directly.
"""
