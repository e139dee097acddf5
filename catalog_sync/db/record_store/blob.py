import json
import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from redis import asyncio as aioredis
from redis.exceptions import RedisError

from catalog_sync.core.exceptions import RecordStoreError
from .base import Record, RecordStore

logger = logging.getLogger(__name__)


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class MemoryBlobBackend:
    """Process-local key/value backend (development and tests)."""

    def __init__(self):
        self._values: Dict[str, str] = {}

    async def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    async def set(self, key: str, value: str) -> None:
        self._values[key] = value


class RedisBlobBackend:
    def __init__(self, client: aioredis.Redis):
        self.client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisBlobBackend":
        return cls(aioredis.from_url(url, decode_responses=True))

    async def get(self, key: str) -> Optional[str]:
        return await self.client.get(key)

    async def set(self, key: str, value: str) -> None:
        await self.client.set(key, value)


class BlobRecordStore(RecordStore):
    """Stores each collection as a single JSON document under ``<prefix><collection>``."""

    def __init__(self, backend, key_prefix: str = ""):
        self.backend = backend
        self.key_prefix = key_prefix

    def _key(self, collection: str) -> str:
        return f"{self.key_prefix}{collection}"

    async def get(self, collection: str) -> List[Record]:
        try:
            raw = await self.backend.get(self._key(collection))
        except (RedisError, OSError) as e:
            logger.error(f"Error reading collection {collection}: {e}")
            raise RecordStoreError(f"Could not read collection '{collection}': {e}") from e
        if not raw:
            return []
        return json.loads(raw)

    async def save(self, collection: str, records: List[Record]) -> bool:
        try:
            await self.backend.set(self._key(collection), json.dumps(records, default=_json_default))
            return True
        except (RedisError, OSError, TypeError) as e:
            logger.error(f"Error saving collection {collection}: {e}")
            return False
