"""Autocomplete controller.

Owns the input text and focus state of one selector and turns renderer events
(focus, typing, scrolling, selection) into cached fetches. Fetching is enabled
by the first focus and stays enabled. Every event recomputes the query key;
a fetch is only issued when the key changed, and responses that arrive for a
key that is no longer current are dropped (last key wins).
"""

from typing import Any, Callable

from services.autocomplete.PaginationController import PaginationController, UrlFactory, is_near_end
from services.autocomplete.SelectionResolver import SelectionResolver
from shared.cache.QueryCache import QueryCache
from shared.clients.fetch.FetchClientInterface import FetchClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.helper.field_path import resolve_field
from shared.helper.url_builder import build_url
from shared.models.errors import FetchError
from shared.models.query import PageParam, PaginatedResult, QueryKey
from shared.models.selector import ControllerState, PaginatedConfig, SelectionValue, SelectorConfig

StateListener = Callable[[ControllerState], None]


class AutocompleteController:
    """State machine between a list renderer and the query cache."""

    def __init__(
        self,
        helper_config: HelperConfig,
        config: SelectorConfig,
        cache: QueryCache,
        fetch_client: FetchClientInterface,
        on_state_change: StateListener | None = None,
    ) -> None:
        self.logging = helper_config.get_logger()
        self._config = config
        self._cache = cache
        self._fetch_client = fetch_client
        self._on_state_change = on_state_change
        self._resolver = SelectionResolver(config.value_field)

        self._state = ControllerState()
        self._current_key: QueryKey | None = None
        self._pagination: PaginationController | None = None
        if isinstance(config, PaginatedConfig):
            self._pagination = PaginationController(
                helper_config=helper_config,
                cache=cache,
                fetch_client=fetch_client,
                get_next_page_param=config.get_next_page_param,
                initial_page_param=config.initial_page_param,
            )

    ##########################################
    ################ GETTER ##################
    ##########################################

    def is_infinite(self) -> bool:
        return self._pagination is not None

    def get_state(self) -> ControllerState:
        """
        Returns a snapshot of the renderer-facing state.
        """
        return self._state.model_copy(update={"options": list(self._state.options)})

    def get_current_key(self) -> QueryKey | None:
        """
        Returns the key of the last issued load, None before the first focus.
        """
        return self._current_key

    def compute_query_key(self) -> QueryKey:
        """
        Builds the query key from the configuration and the current input text.
        """
        searchable = self._config.searchable
        return QueryKey(
            url=self._config.url,
            params=self._config.query_params,
            searchable=searchable,
            search=self._state.input_text if searchable else None,
            infinite=self.is_infinite(),
        )

    def get_option_label(self, option: Any) -> str:
        label = resolve_field(option, self._config.label_field)
        return "" if label is None else str(label)

    def get_option_key(self, option: Any) -> Any:
        return resolve_field(option, self._config.value_field)

    def resolve_value(self, value: SelectionValue) -> Any | list[Any] | None:
        """
        Resolves the caller's current value against the options loaded so far.
        """
        return self._resolver.resolve(value, self._state.options)

    def is_option_equal_to_value(self, option: Any, value: SelectionValue) -> bool:
        return self._resolver.is_option_equal_to_value(option, value)

    ##########################################
    ################ EVENTS ##################
    ##########################################

    async def on_focus(self) -> None:
        """
        First focus enables fetching and loads the current key. Later focus events do nothing.
        """
        if self._state.focused:
            return
        self._state.focused = True
        self.logging.debug("Selector focused, fetching enabled.")
        await self._load(self.compute_query_key())

    async def on_input_change(self, text: str) -> None:
        """
        Updates the input text. For searchable selectors a changed key starts a new query.
        """
        self._state.input_text = text
        if not self._state.focused or not self._config.searchable:
            self._notify()
            return

        key = self.compute_query_key()
        if key == self._current_key:
            self._notify()
            return
        await self._load(key)

    async def on_list_scroll(self, scroll_top: float, client_height: float, scroll_height: float) -> None:
        """
        Requests the next page once the list is scrolled near its end.
        """
        if self._pagination is None or not self._state.focused:
            return
        if not is_near_end(scroll_top, client_height, scroll_height, self._config.scroll_threshold):
            return
        await self.fetch_next_page()

    def on_select(self, selection: Any | list[Any] | None) -> None:
        """Report a selection to the caller's on_change.

        Args:
            selection (Any | list[Any] | None): The chosen option, or all chosen options of a multi select.
        """
        if selection is None or self._config.on_change is None:
            return
        if isinstance(selection, (list, tuple)):
            items = list(selection)
            values = [self.get_option_key(item) for item in items]
            self.logging.info("Selected %d option(s): %r", len(items), values)
            self._config.on_change(values, items)
        else:
            value = self.get_option_key(selection)
            self.logging.info("Selected option %r", value)
            self._config.on_change(value, selection)

    ##########################################
    ################# CORE ###################
    ##########################################

    async def fetch_next_page(self) -> None:
        """
        Appends the next page of the current key. No-op without a next page or while this selector awaits one.
        """
        pagination = self._pagination
        if pagination is None or not pagination.has_next_page or self._state.fetching_next_page:
            return

        key = self._current_key
        self._state.fetching_next_page = True
        self._notify()
        try:
            result = await pagination.fetch_next()
            options = self._derive_paginated_options(result) if result is not None else None
        except Exception as exc:
            if key == self._current_key:
                self._state.fetching_next_page = False
                self._fail(key, exc)
            return

        if key != self._current_key:
            self.logging.debug("Discarding next page for outdated query %s", key.describe())
            return
        self._state.fetching_next_page = False
        self._state.has_next_page = pagination.has_next_page
        if options is None:
            self._notify()
            return
        self._apply_options(options)

    async def refetch(self) -> None:
        """
        Refetches the current key, bypassing cached data. Does nothing before the first focus.
        """
        if not self._state.focused:
            return
        await self._load(self.compute_query_key(), force=True)

    async def _load(self, key: QueryKey, force: bool = False) -> None:
        self._current_key = key
        self._state.loading = force or not self._cache.has_data(key)
        if self._pagination is not None:
            self._state.has_next_page = False
            self._state.fetching_next_page = False
        if self._state.loading:
            self._notify()

        # continuation and extractor callbacks may raise as well
        try:
            if self._pagination is not None:
                result = await self._pagination.fetch_first(key, self._url_factory(key), force=force)
                options = self._derive_paginated_options(result)
            else:
                url = build_url(key.url, key.params, key.search, key.searchable)
                body = await self._cache.get_or_fetch(key, lambda: self._fetch_client.fetch_page(url), force=force)
                options = self._extract_options(body)
        except Exception as exc:
            if key != self._current_key:
                self.logging.debug("Discarding failure of outdated query %s", key.describe())
                return
            self._fail(key, exc)
            return

        if key != self._current_key:
            self.logging.debug("Discarding response of outdated query %s", key.describe())
            return

        if self._pagination is not None:
            self._state.has_next_page = self._pagination.has_next_page
        self._apply_options(options)

    ##########################################
    ############### HELPERS ##################
    ##########################################

    def _url_factory(self, key: QueryKey) -> UrlFactory:
        """
        Builds page urls for a key. Static urls get the page param merged into the query string.
        """
        def url_for(page_param: PageParam | None) -> str:
            if callable(key.url):
                return build_url(key.url(page_param), key.params, key.search, key.searchable)
            params = {**key.params, **(page_param or {})}
            return build_url(key.url, params, key.search, key.searchable)
        return url_for

    def _extract_options(self, body: Any) -> list[Any]:
        options_path = self._config.options_path
        options = resolve_field(body, options_path) if options_path is not None else body
        if not isinstance(options, (list, tuple)):
            self.logging.warning(
                "Response did not yield an options list (got %s), showing no options.",
                type(options).__name__,
            )
            return []
        return list(options)

    def _derive_paginated_options(self, result: PaginatedResult) -> list[Any]:
        options: list[Any] = []
        for page_data in result.get_page_data():
            options.extend(self._extract_options(page_data))
        return options

    def _apply_options(self, options: list[Any]) -> None:
        self._state.options = options
        self._state.loading = False
        self._state.error = None
        self.logging.debug("Loaded %d option(s) for %s", len(options), self._current_key.describe())
        self._notify()

    def _fail(self, key: QueryKey, exc: Exception) -> None:
        # stale-if-error: keep the options loaded so far
        if isinstance(exc, FetchError):
            self.logging.warning("Loading options for %s failed: %s", key.describe(), exc)
        else:
            self.logging.error("Selector callback failed for %s: %s: %s", key.describe(), type(exc).__name__, exc)
        self._state.loading = False
        self._state.error = str(exc) or type(exc).__name__
        self._notify()

    def _notify(self) -> None:
        if self._on_state_change is not None:
            self._on_state_change(self.get_state())
