"""Pydantic models for cache keys, cache entries and paginated results."""

from datetime import datetime
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict

Scalar = str | int | float | bool
QueryParams = dict[str, Scalar]
PageParam = dict[str, Scalar]

QUERY_NAMESPACE = "async-autocomplete"


class QueryKey(BaseModel):
    """
    Composite identity of a request, used for caching and in-flight dedup.

    Two keys are equal when all their parts are structurally equal. The params map is compared
    by content, so insertion order does not matter. A callable url template takes part by identity.
    """
    model_config = ConfigDict(frozen=True)

    namespace: str = QUERY_NAMESPACE
    url: str | Callable[[PageParam | None], str]
    params: QueryParams = {}
    searchable: bool = False
    search: str | None = None
    infinite: bool = False

    def fingerprint(self) -> tuple:
        """
        Returns a hashable tuple with the same equality as the key itself.
        """
        return (
            self.namespace,
            self.url,
            tuple(sorted(self.params.items())),
            self.searchable,
            self.search,
            self.infinite,
        )

    def __hash__(self) -> int:
        return hash(self.fingerprint())

    def describe(self) -> str:
        """
        Short human readable form for log lines.
        """
        url = self.url if isinstance(self.url, str) else getattr(self.url, "__name__", "<template>")
        mode = "infinite" if self.infinite else "single"
        return f"{mode}:{url} params={self.params} search={self.search!r}"


class CacheEntry(BaseModel):
    """
    Settled data stored for one query key.
    """
    key: QueryKey
    data: Any
    fetched_at: datetime
    stale: bool = False


class Page(BaseModel):
    """
    One fetched page: the raw decoded body and the page param it was fetched with.
    """
    data: Any
    page_param: PageParam | None = None


class PaginatedResult(BaseModel):
    """
    Ordered pages of a paginated query. Page order is fetch order.

    Attributes:
        pages (list[Page]): Pages fetched so far, oldest first.
        next_param (PageParam | None): Param for the next page, or None when the last page was reached.
    """
    pages: list[Page] = []
    next_param: PageParam | None = None

    def get_page_data(self) -> list[Any]:
        """
        Returns the raw body of every page in fetch order.
        """
        return [page.data for page in self.pages]

    def with_page(self, page: Page, next_param: PageParam | None) -> "PaginatedResult":
        """
        Returns a new result with the page appended. The receiver is left untouched.
        """
        return PaginatedResult(pages=[*self.pages, page], next_param=next_param)
