"""Redis-backed balance cache.

Keys:  kost:balance:gen:{tenant_id}         generation counter (INCR on invalidate)
       kost:balance:{tenant_id}:{gen}       JSON entry, money as decimal strings
TTL:   settings.BALANCE_CACHE_TTL_SECONDS on entries, a day on counters

Redis failures and malformed tenant ids degrade to a cache miss (WARNING log);
PostgreSQL stays the source of truth, so a broken cache never fails a balance read.
"""

import json
import logging
from collections.abc import Awaitable, Callable
from decimal import Decimal

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from config.settings import settings
from src.kost_balance.domain.cache import BalanceCacheProtocol, NullBalanceCache
from src.kost_balance.domain.models import BalanceResult
from src.kost_common.money import money_to_str
from src.kost_common.redis_client import get_redis

logger = logging.getLogger("kost.balance.cache")

_KEY_PREFIX = "kost:balance"
# Outlives every entry by far; a counter that expires restarts at 0 long after
# the entries of its earlier generations are gone
_GENERATION_TTL_SECONDS = 86400


def _checked(tenant_id: str) -> str:
    if ":" in tenant_id:
        raise ValueError(f"tenant_id must not contain ':', got {tenant_id!r}")
    return tenant_id


def generation_key(tenant_id: str) -> str:
    return f"{_KEY_PREFIX}:gen:{_checked(tenant_id)}"


def balance_key(tenant_id: str, generation: int) -> str:
    return f"{_KEY_PREFIX}:{_checked(tenant_id)}:{generation}"


def _encode(result: BalanceResult) -> str:
    return json.dumps({
        "tenant_id": result.tenant_id,
        "monthly_rent": money_to_str(result.monthly_rent),
        "total_payments": money_to_str(result.total_payments),
        "outstanding_balance": money_to_str(result.outstanding_balance),
        "status": result.status,
    })


def _decode(raw: str) -> BalanceResult:
    data = json.loads(raw)
    return BalanceResult(
        tenant_id=data["tenant_id"],
        monthly_rent=Decimal(data["monthly_rent"]),
        total_payments=Decimal(data["total_payments"]),
        outstanding_balance=Decimal(data["outstanding_balance"]),
        status=data["status"],
    )


class RedisBalanceCache:
    def __init__(
        self,
        redis_factory: Callable[[], Awaitable[aioredis.Redis]] = get_redis,
        ttl_seconds: int | None = None,
    ) -> None:
        self._redis_factory = redis_factory
        if ttl_seconds is None:
            ttl_seconds = settings.BALANCE_CACHE_TTL_SECONDS
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        self._ttl = ttl_seconds

    async def generation(self, tenant_id: str) -> int | None:
        try:
            redis = await self._redis_factory()
            raw = await redis.get(generation_key(tenant_id))
            return int(raw) if raw is not None else 0
        except (RedisError, ValueError) as exc:
            logger.warning("balance cache generation read failed tenant=%s: %s", tenant_id, exc)
            return None

    async def get(self, tenant_id: str, generation: int) -> BalanceResult | None:
        try:
            redis = await self._redis_factory()
            raw = await redis.get(balance_key(tenant_id, generation))
        except (RedisError, ValueError) as exc:
            logger.warning("balance cache read failed tenant=%s: %s", tenant_id, exc)
            return None
        if raw is None:
            return None
        try:
            return _decode(raw)
        except (ValueError, KeyError) as exc:
            logger.warning("balance cache entry unreadable tenant=%s: %s", tenant_id, exc)
            return None

    async def set(self, result: BalanceResult, generation: int) -> None:
        try:
            redis = await self._redis_factory()
            await redis.set(
                balance_key(result.tenant_id, generation), _encode(result), ex=self._ttl
            )
        except (RedisError, ValueError) as exc:
            logger.warning("balance cache write failed tenant=%s: %s", result.tenant_id, exc)

    async def invalidate(self, tenant_id: str) -> None:
        try:
            redis = await self._redis_factory()
            key = generation_key(tenant_id)
            await redis.incr(key)
            await redis.expire(key, _GENERATION_TTL_SECONDS)
        except (RedisError, ValueError) as exc:
            # Entries of the old generation still expire within the TTL
            logger.warning("balance cache invalidate failed tenant=%s: %s", tenant_id, exc)


def get_balance_cache() -> BalanceCacheProtocol:
    """Cache selected by settings.BALANCE_CACHE_ENABLED."""
    if settings.BALANCE_CACHE_ENABLED:
        return RedisBalanceCache()
    return NullBalanceCache()
