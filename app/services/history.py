import asyncio
import logging
from typing import Callable, List, Optional, Tuple, Union
from datetime import datetime

from app.constants.storage_keys import HISTORY_KEY
from app.exceptions import DuplicateRecord, MalformedPersistedRecord, RecordNotFound
from app.schemas.scan import ScanResult
from app.services.preference_store import PreferenceStore

logger = logging.getLogger(__name__)

Identity = Tuple[datetime, Optional[str]]


class HistoryRepository:
    """
    Ordered scan history, newest first, persisted as a list of encoded records
    under a single key.

    Every mutation rewrites the whole list. If the write fails the in-memory
    sequence is rolled back so callers never observe a half-applied change.
    """

    def __init__(self, store: PreferenceStore, key: str = HISTORY_KEY):
        self.store = store
        self.key = key
        self.items: List[ScanResult] = []
        self._previous: List[ScanResult] = []
        self._lock = asyncio.Lock()

    async def load(self):
        async with self._lock:
            raw_items = await self.store.get_string_list(self.key) or []
            loaded = []
            for position, raw in enumerate(raw_items):
                try:
                    loaded.append(ScanResult.decode(raw))
                except MalformedPersistedRecord as e:
                    logger.warning(f"Skipping unreadable history entry #{position}: {e}")
            self.items = loaded
        logger.info(f"Loaded {len(loaded)} history records ({len(raw_items) - len(loaded)} skipped)")

    async def save(self):
        await self.store.set_string_list(self.key, [item.encode() for item in self.items])

    async def _commit(self, previous: List[ScanResult]):
        try:
            await self.save()
        except Exception:
            logger.error("Saving history failed, restoring previous state")
            self.items = previous
            raise

    def snapshot(self) -> Tuple[ScanResult, ...]:
        return tuple(self.items)

    def __len__(self):
        return len(self.items)

    def get(self, index: int) -> ScanResult:
        self._check_index(index)
        return self.items[index]

    # --- Mutations ---
    # Each mutate-and-save runs under the lock so a rollback never discards
    # another caller's committed change.

    async def add(self, result: ScanResult):
        await self.insert(0, result)

    async def insert(self, index: int, result: ScanResult):
        """Insert at index, clamped to the current bounds."""
        async with self._lock:
            self._insert(index, result)
            await self._commit(self._previous)

    async def restore(self, index: int, result: ScanResult) -> int:
        """Undo a deletion; refuses a record whose identity is already present."""
        async with self._lock:
            if self._find(result.identity) is not None:
                raise DuplicateRecord(f"History already holds the record from {result.timestamp.isoformat()}")
            position = self._insert(index, result)
            await self._commit(self._previous)
            return position

    async def replace_at(self, index: int, result: ScanResult):
        async with self._lock:
            self._check_index(index)
            self._snapshot_previous()
            self.items[index] = result
            await self._commit(self._previous)

    async def remove_at(self, index: int) -> ScanResult:
        async with self._lock:
            self._check_index(index)
            self._snapshot_previous()
            removed = self.items.pop(index)
            await self._commit(self._previous)
            return removed

    async def clear(self):
        async with self._lock:
            self._snapshot_previous()
            self.items = []
            await self._commit(self._previous)

    # --- Identity based access ---

    def index_of(self, identity: Identity) -> int:
        position = self._find(identity)
        if position is None:
            raise RecordNotFound(f"No history record with timestamp {identity[0].isoformat()}")
        return position

    async def replace(self, result: ScanResult):
        """Overwrite the record sharing result's (timestamp, image_path)."""
        await self._update(result, lambda current: result)

    async def remove(self, result: ScanResult) -> int:
        """Remove by identity; returns the index it occupied so it can be restored."""
        async with self._lock:
            index = self.index_of(result.identity)
            self._snapshot_previous()
            self.items.pop(index)
            await self._commit(self._previous)
            return index

    async def toggle_favorite(self, target: Union[int, ScanResult]) -> ScanResult:
        return await self._update(target, lambda current: current.with_favorite_toggled())

    async def update_summary(self, target: Union[int, ScanResult], summary: str) -> ScanResult:
        return await self._update(target, lambda current: current.with_summary(summary))

    async def _update(self, target: Union[int, ScanResult], change: Callable[[ScanResult], ScanResult]) -> ScanResult:
        async with self._lock:
            index = target if isinstance(target, int) else self.index_of(target.identity)
            self._check_index(index)
            updated = change(self.items[index])
            self._snapshot_previous()
            self.items[index] = updated
            await self._commit(self._previous)
            return updated

    # --- Helpers, called with the lock held ---

    def _snapshot_previous(self):
        self._previous = list(self.items)

    def _insert(self, index: int, result: ScanResult) -> int:
        self._snapshot_previous()
        index = max(0, min(index, len(self.items)))
        self.items.insert(index, result)
        return index

    def _find(self, identity: Identity) -> Optional[int]:
        for position, item in enumerate(self.items):
            if item.identity == identity:
                return position
        return None

    def _check_index(self, index: int):
        if not 0 <= index < len(self.items):
            raise RecordNotFound(f"History index {index} out of range (size {len(self.items)})")
