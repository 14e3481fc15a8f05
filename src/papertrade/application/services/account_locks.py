"""Per-account serialization"""

import asyncio
from collections import defaultdict
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class AccountLocks:
    """One asyncio.Lock per account id

    Mutations for the same account run one at a time; different accounts
    never wait on each other.
    """

    def __init__(self) -> None:
        self._locks: defaultdict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    @asynccontextmanager
    async def hold(self, account_id: str) -> AsyncIterator[None]:
        async with self._locks[account_id]:
            yield

    def is_locked(self, account_id: str) -> bool:
        return account_id in self._locks and self._locks[account_id].locked()
