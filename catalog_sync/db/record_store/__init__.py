import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncIterator

from catalog_sync.core.config import get_settings
from .base import (COLLECTIONS, ORDER_ITEMS, ORDERS, PRODUCTS, SHOPIFY_PRODUCTS,
                   SHOPIFY_STORES, Record, RecordStore)
from .blob import BlobRecordStore, MemoryBlobBackend, RedisBlobBackend

logger = logging.getLogger(__name__)


@lru_cache()
def _blob_backend(kind: str):
    # One backend per process so the memory store survives across requests
    if kind == "memory":
        return MemoryBlobBackend()
    return RedisBlobBackend.from_url(get_settings().REDIS_URL)


@asynccontextmanager
async def open_record_store() -> AsyncIterator[RecordStore]:
    """Open the record store selected by ``RECORD_STORE_BACKEND``.

    Used directly by Celery tasks; the FastAPI dependency below wraps it.
    """
    settings = get_settings()
    backend = settings.RECORD_STORE_BACKEND.lower()

    if backend == "sql":
        from catalog_sync.db.base import AsyncSessionLocal
        from .sql import SqlRecordStore

        async with AsyncSessionLocal() as session:
            yield SqlRecordStore(session)
    elif backend in ("redis", "memory"):
        yield BlobRecordStore(_blob_backend(backend), key_prefix=settings.BLOB_KEY_PREFIX)
    else:
        raise ValueError(f"Unsupported record store backend: {settings.RECORD_STORE_BACKEND}")


async def get_record_store() -> AsyncIterator[RecordStore]:
    async with open_record_store() as records:
        yield records


__all__ = [
    "COLLECTIONS",
    "ORDER_ITEMS",
    "ORDERS",
    "PRODUCTS",
    "SHOPIFY_PRODUCTS",
    "SHOPIFY_STORES",
    "Record",
    "RecordStore",
    "BlobRecordStore",
    "MemoryBlobBackend",
    "RedisBlobBackend",
    "get_record_store",
    "open_record_store",
]
