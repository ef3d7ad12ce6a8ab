"""Process-wide query cache with in-flight request dedup.

One instance is created per application and handed to every selector
controller, so selectors pointing at the same endpoint with the same
parameters share settled data and in-flight requests.
"""

import asyncio
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable

from shared.helper.HelperConfig import HelperConfig
from shared.models.query import CacheEntry, QueryKey


class QueryCache:
    """Keyed store of settled query results, keyed by structurally equal QueryKeys."""

    def __init__(self, helper_config: HelperConfig) -> None:
        self.logging = helper_config.get_logger()
        self._entries: dict[QueryKey, CacheEntry] = {}
        self._in_flight: dict[QueryKey, asyncio.Task] = {}
        # next page requests per key
        self._extending: dict[QueryKey, asyncio.Task] = {}

    ##########################################
    ################ GETTER ##################
    ##########################################

    def get_entry(self, key: QueryKey) -> CacheEntry | None:
        """
        Returns the settled entry for the key, stale or not.
        """
        return self._entries.get(key)

    def peek(self, key: QueryKey) -> Any | None:
        """
        Returns the settled data for the key without triggering a fetch. None if nothing is cached.
        """
        entry = self._entries.get(key)
        return entry.data if entry is not None else None

    def has_data(self, key: QueryKey) -> bool:
        """
        Returns True if fresh settled data exists for the key.
        """
        entry = self._entries.get(key)
        return entry is not None and not entry.stale

    def is_fetching(self, key: QueryKey) -> bool:
        """
        Returns True while a request for the key is in flight.
        """
        return key in self._in_flight

    def is_extending(self, key: QueryKey) -> bool:
        """
        Returns True while a next page request for the key is in flight.
        """
        return key in self._extending

    ##########################################
    ################# CORE ###################
    ##########################################

    async def get_or_fetch(self, key: QueryKey, fetch_fn: Callable[[], Awaitable[Any]], force: bool = False) -> Any:
        """
        Return cached data for the key, or fetch it once and cache the result.

        Concurrent callers with equal keys share a single in-flight request. A failed fetch is
        not cached; the error reaches every waiting caller and the next call retries.

        Args:
            key (QueryKey): The query identity.
            fetch_fn (Callable[[], Awaitable[Any]]): Performs the actual read. Invoked at most once per in-flight key.
            force (bool): If True, ignore settled data and fetch again. An in-flight request is still shared.

        Returns:
            Any: The settled data.

        Raises:
            Exception: Whatever fetch_fn raised.
        """
        entry = self._entries.get(key)
        if entry is not None and not entry.stale and not force:
            self.logging.debug("Query cache hit for %s", key.describe())
            return entry.data

        task = self._in_flight.get(key)
        if task is None:
            self.logging.debug("Query cache miss for %s, fetching", key.describe())
            task = asyncio.ensure_future(self._run_fetch(key, fetch_fn, self._in_flight))
            self._in_flight[key] = task
        else:
            self.logging.debug("Joining in-flight request for %s", key.describe())

        # a cancelled waiter must not cancel the request other waiters share
        return await asyncio.shield(task)

    async def extend(self, key: QueryKey, extend_fn: Callable[[], Awaitable[Any]]) -> Any:
        """
        Grow the settled data of a key, one request per key at a time.

        Used for next pages: callers that arrive while an extension of the key is in flight
        join it instead of starting another one, so pages of a key are fetched strictly in order.

        Args:
            key (QueryKey): The query identity.
            extend_fn (Callable[[], Awaitable[Any]]): Returns the grown data. Not invoked when joining.

        Returns:
            Any: The grown data, also stored for the key.

        Raises:
            Exception: Whatever extend_fn raised. The settled data is left as it was.
        """
        task = self._extending.get(key)
        if task is None:
            self.logging.debug("Extending %s", key.describe())
            task = asyncio.ensure_future(self._run_fetch(key, extend_fn, self._extending))
            self._extending[key] = task
        else:
            self.logging.debug("Joining in-flight next page request for %s", key.describe())
        return await asyncio.shield(task)

    async def _run_fetch(self, key: QueryKey, fetch_fn: Callable[[], Awaitable[Any]], tasks: dict[QueryKey, asyncio.Task]) -> Any:
        try:
            data = await fetch_fn()
            self.set(key, data)
            return data
        finally:
            tasks.pop(key, None)

    def set(self, key: QueryKey, data: Any) -> None:
        """
        Store settled data for the key, replacing any previous entry.
        """
        self._entries[key] = CacheEntry(key=key, data=data, fetched_at=datetime.now(timezone.utc))

    ##########################################
    ############### LIFECYCLE ################
    ##########################################

    def invalidate(self, key: QueryKey | None = None) -> None:
        """
        Mark entries stale so the next access refetches them. Stale data stays readable via peek().

        Args:
            key (QueryKey | None): If provided, only this key. If None, every entry.
        """
        if key is None:
            targets = list(self._entries.values())
        else:
            entry = self._entries.get(key)
            targets = [entry] if entry is not None else []
        for entry in targets:
            entry.stale = True

    def clear(self, key: QueryKey | None = None) -> None:
        """
        Drop cache entries.

        Args:
            key (QueryKey | None): If provided, drop only this key. If None, drop all entries.
        """
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: QueryKey) -> bool:
        return key in self._entries
