"""Balance read-through cache Protocol.

Cache-aside with per-tenant generations:
  1. read the tenant's generation before touching the stores;
  2. get/set entries under that generation only;
  3. invalidation bumps the generation.

A result computed from pre-commit data is therefore stored under a generation
that no reader asks for again. Entries also expire after
BALANCE_CACHE_TTL_SECONDS, which bounds staleness if an invalidation is lost.
`generation()` returning None means the cache is unusable for this read.
"""

from typing import Protocol

from src.kost_balance.domain.models import BalanceResult


class BalanceCacheProtocol(Protocol):
    async def generation(self, tenant_id: str) -> int | None: ...

    async def get(self, tenant_id: str, generation: int) -> BalanceResult | None: ...

    async def set(self, result: BalanceResult, generation: int) -> None: ...

    async def invalidate(self, tenant_id: str) -> None: ...


class NullBalanceCache:
    """Cache disabled: every read is a miss."""

    async def generation(self, tenant_id: str) -> int | None:
        return None

    async def get(self, tenant_id: str, generation: int) -> BalanceResult | None:
        return None

    async def set(self, result: BalanceResult, generation: int) -> None:
        return None

    async def invalidate(self, tenant_id: str) -> None:
        return None
