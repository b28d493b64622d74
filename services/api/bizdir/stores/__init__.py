"""Data stores for persistence and caching.

Stores handle:
- PostgreSQL: DB session, the business store adapter, ORM operations
- Redis: caching with TTL policies

No ranking or pagination logic in stores - that belongs in services.
"""
