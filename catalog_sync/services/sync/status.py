import asyncio
import logging
import weakref
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import AsyncIterator, Optional

from catalog_sync.core.exceptions import InvalidSyncTransition, StoreNotFoundError
from catalog_sync.crud import store as crud_store
from catalog_sync.db.record_store import RecordStore
from catalog_sync.schemas.store import ShopifyStore, StoreSyncStatus
from catalog_sync.schemas.sync import SyncResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreSyncState:
    """Store sync status with its allowed transitions.

    idle | success | error -> syncing -> success | error
    """
    status: StoreSyncStatus = StoreSyncStatus.IDLE
    last_sync_at: Optional[datetime] = None

    def begin(self, now: Optional[datetime] = None) -> "StoreSyncState":
        if self.status == StoreSyncStatus.SYNCING:
            # Left behind by a crashed process; the lock guarantees no live sync holds it
            logger.warning("Store was still marked as syncing, restarting sync")
        return StoreSyncState(StoreSyncStatus.SYNCING, now or datetime.now(timezone.utc))

    def finish(self, success: bool, now: Optional[datetime] = None) -> "StoreSyncState":
        if self.status != StoreSyncStatus.SYNCING:
            raise InvalidSyncTransition(f"Cannot finish a sync from state '{self.status.value}'")
        status = StoreSyncStatus.SUCCESS if success else StoreSyncStatus.ERROR
        return StoreSyncState(status, now or datetime.now(timezone.utc))


class StoreLockRegistry:
    """One asyncio.Lock per store id, created on first use and dropped once unreferenced."""

    def __init__(self):
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()

    def __contains__(self, store_id: str) -> bool:
        return store_id in self._locks

    def __len__(self) -> int:
        return len(self._locks)

    def lock_for(self, store_id: str) -> asyncio.Lock:
        lock = self._locks.get(store_id)
        if lock is None:
            lock = self._locks[store_id] = asyncio.Lock()
        return lock


sync_locks = StoreLockRegistry()


@dataclass
class SyncRun:
    store: ShopifyStore
    succeeded: bool = field(default=False)

    def complete(self, result: SyncResult) -> SyncResult:
        self.succeeded = result.success
        return result


@asynccontextmanager
async def store_sync_operation(records: RecordStore, store_id: str) -> AsyncIterator[SyncRun]:
    """
    Run one sync for a store under its lock.

    Marks the store as syncing on entry and writes success or error on every
    exit path. The body reports its outcome through ``SyncRun.complete``; an
    exception or a missing ``complete`` call counts as an error.
    """
    async with sync_locks.lock_for(store_id):
        store = await crud_store.get_store(records, store_id)
        if store is None:
            raise StoreNotFoundError(store_id)

        state = StoreSyncState(StoreSyncStatus(store.sync_status), store.last_sync_at).begin()
        await crud_store.set_sync_state(records, store_id, state.status.value, state.last_sync_at)
        logger.info(f"Sync started for store {store_id}")

        run = SyncRun(store=store)
        try:
            yield run
        finally:
            final = state.finish(run.succeeded)
            await crud_store.set_sync_state(records, store_id, final.status.value, final.last_sync_at)
            logger.info(f"Sync finished for store {store_id} with status {final.status.value}")
