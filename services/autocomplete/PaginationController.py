"""Pagination controller.

Accumulates pages for one query key at a time. The first page goes through
the shared QueryCache so equal keys share pages and in-flight requests; later
pages extend the same cache entry in fetch order, one next page request per
key at a time.
"""

from typing import Callable

from shared.cache.QueryCache import QueryCache
from shared.clients.fetch.FetchClientInterface import FetchClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.models.query import Page, PageParam, PaginatedResult, QueryKey
from shared.models.selector import DEFAULT_SCROLL_THRESHOLD, NextPageParamFunction

UrlFactory = Callable[[PageParam | None], str]


def is_near_end(scroll_top: float, client_height: float, scroll_height: float, threshold: float = DEFAULT_SCROLL_THRESHOLD) -> bool:
    """Check whether a scrolled list is within `threshold` of its scrollable end.

    Args:
        scroll_top (float): Current scroll offset.
        client_height (float): Visible height of the list.
        scroll_height (float): Full scrollable height of the list.
        threshold (float): Distance from the end that still counts as "near".

    Returns:
        bool: True if the next page should be requested.
    """
    return scroll_top + client_height >= scroll_height - threshold


class PaginationController:
    """Tracks pages, the next page param and the in-flight state of the current key."""

    def __init__(
        self,
        helper_config: HelperConfig,
        cache: QueryCache,
        fetch_client: FetchClientInterface,
        get_next_page_param: NextPageParamFunction | None = None,
        initial_page_param: PageParam | None = None,
    ) -> None:
        self.logging = helper_config.get_logger()
        self._cache = cache
        self._fetch_client = fetch_client
        self._get_next_page_param = get_next_page_param
        self._initial_page_param = initial_page_param

        # state of the current key
        self._key: QueryKey | None = None
        self._url_for: UrlFactory | None = None
        self._result: PaginatedResult | None = None

    ##########################################
    ################ GETTER ##################
    ##########################################

    def get_key(self) -> QueryKey | None:
        return self._key

    def get_result(self) -> PaginatedResult | None:
        return self._result

    def get_pages(self) -> list[Page]:
        return list(self._result.pages) if self._result is not None else []

    @property
    def has_next_page(self) -> bool:
        return self._result is not None and self._result.next_param is not None

    @property
    def is_fetching_next_page(self) -> bool:
        # read from the shared cache, a next page of the key may have been requested by another selector
        return self._key is not None and self._cache.is_extending(self._key)

    ##########################################
    ################# CORE ###################
    ##########################################

    async def fetch_first(self, key: QueryKey, url_for: UrlFactory, force: bool = False) -> PaginatedResult:
        """Make `key` the current key and obtain its first page.

        Pages already cached for an equal key are reused as they are, without refetching.

        Args:
            key (QueryKey): The paginated query identity.
            url_for (UrlFactory): Builds the full request url for a page param.
            force (bool): If True, drop cached pages and start again from the first page.

        Returns:
            PaginatedResult: The result for `key`. Callers must check the key is still current before using it.

        Raises:
            FetchError: If the first page cannot be fetched.
        """
        self._key = key
        self._url_for = url_for
        self._result = None
        initial_page_param = self._initial_page_param

        async def _fetch_first_page() -> PaginatedResult:
            data = await self._fetch_client.fetch_page(url_for(initial_page_param))
            pages = [Page(data=data, page_param=initial_page_param)]
            return PaginatedResult(pages=pages, next_param=self._compute_next_param(pages))

        result = await self._cache.get_or_fetch(key, _fetch_first_page, force=force)
        if self._key == key:
            self._result = result
            self.logging.debug(
                "Paginated query %s holds %d page(s), has next page: %s",
                key.describe(), len(result.pages), self.has_next_page,
            )
        return result

    async def fetch_next(self) -> PaginatedResult | None:
        """Fetch and append the next page of the current key.

        Pages of a key are fetched strictly in order: while a next page of the key is in flight,
        for this selector or any other sharing the cache, the call joins that request instead of
        issuing a new one.

        Returns:
            PaginatedResult | None: The grown result, or None once the last page was reached. The
                result belongs to the key that was current when the call started.

        Raises:
            FetchError: If the page cannot be fetched. Pages fetched so far are kept.
            Exception: Whatever get_next_page_param raised.
        """
        if not self.has_next_page:
            self.logging.debug("Skipping next page request, last page reached.")
            return None

        key = self._key
        url_for = self._url_for
        result = self._latest_result(key)
        if result.next_param is None and not self._cache.is_extending(key):
            # another selector sharing the key already reached the last page
            self._result = result
            return None

        async def _fetch_next_page() -> PaginatedResult:
            page = Page(data=await self._fetch_client.fetch_page(url_for(result.next_param)), page_param=result.next_param)
            grown = result.with_page(page, next_param=self._compute_next_param([*result.pages, page]))
            self.logging.debug("Appended page %d for %s", len(grown.pages), key.describe())
            return grown

        grown = await self._cache.extend(key, _fetch_next_page)
        if self._key == key:
            self._result = grown
        return grown

    ##########################################
    ############### HELPERS ##################
    ##########################################

    def _latest_result(self, key: QueryKey) -> PaginatedResult:
        """
        Returns whichever is longer: our pages or the pages in the shared cache entry.
        """
        cached = self._cache.peek(key)
        if isinstance(cached, PaginatedResult) and len(cached.pages) > len(self._result.pages):
            return cached
        return self._result

    def _compute_next_param(self, pages: list[Page]) -> PageParam | None:
        if self._get_next_page_param is None:
            return None
        page_data = [page.data for page in pages]
        return self._get_next_page_param(page_data[-1], page_data)
