"""RediSearch adapter — ``FT.SEARCH`` over ``redis.asyncio``."""

from cinesift.adapters.redisearch.adapter import RediSearchAdapter

__all__ = ["RediSearchAdapter"]
