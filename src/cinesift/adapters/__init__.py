"""Search adapter layer — Connectors that execute compiled queries.

Built-in adapters:
  - redisearch: RediSearch (``FT.SEARCH``) over ``redis.asyncio``

Implement ``SearchAdapter`` to connect another engine that speaks the
same query syntax.
"""
