"""BalanceInvalidator — the subscriber side of the recompute contract.

The engine itself is stateless; the only thing that can go stale is a cached
BalanceResult. Each event names the tenant whose balance it affects.
"""

import logging

from src.kost_balance.domain.cache import BalanceCacheProtocol
from src.kost_balance.domain.events import BalanceEvent
from src.kost_balance.infrastructure.cache import get_balance_cache

logger = logging.getLogger("kost.balance")


class BalanceInvalidator:
    def __init__(self, cache: BalanceCacheProtocol | None = None) -> None:
        self._cache: BalanceCacheProtocol = cache or get_balance_cache()

    async def handle(self, event: BalanceEvent) -> None:
        logger.debug(
            "balance invalidated tenant=%s reason=%s", event.tenant_id, type(event).__name__
        )
        await self._cache.invalidate(event.tenant_id)
