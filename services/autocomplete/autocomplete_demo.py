"""Console demo for the autocomplete controller.

Drives one selector against a real backend the way a list renderer would:
focus, type the configured search terms, scroll to the end of the list and
select the first option. Options are printed by a console renderer.

Usage:
    AUTOCOMPLETE_URL=http://localhost:8000/users python -m services.autocomplete.autocomplete_demo
"""

import asyncio
from typing import Any

from services.autocomplete.AutocompleteController import AutocompleteController
from shared.cache.QueryCache import QueryCache
from shared.clients.fetch.FetchClientManager import FetchClientManager
from shared.helper.HelperConfig import HelperConfig
from shared.logging.logging_setup import ColorLogger, setup_logging
from shared.models.selector import ControllerState, PaginatedConfig, SelectorConfig, SinglePageConfig

LIST_ROW_HEIGHT = 20  # px per rendered option
LIST_HEIGHT = 200     # px of visible list


class ConsoleRenderer:
    """Prints selector state changes and derives scroll geometry from the option count."""

    def __init__(self, logger: ColorLogger) -> None:
        self.logging = logger
        self.controller: AutocompleteController | None = None
        self._last_count = -1

    def render(self, state: ControllerState) -> None:
        if state.loading:
            self.logging.info("⏳ loading options for %r ...", state.input_text)
            return
        if state.error:
            self.logging.warning("Loading failed: %s", state.error)
        if len(state.options) == self._last_count:
            return
        self._last_count = len(state.options)
        labels = [self.controller.get_option_label(option) for option in state.options] if self.controller else []
        self.logging.info(
            "%d option(s) for %r%s: %s",
            len(labels),
            state.input_text,
            " (more available)" if state.has_next_page else "",
            ", ".join(labels[:10]) + (" ..." if len(labels) > 10 else ""),
            color="cyan",
        )

    def scroll_to_end(self) -> tuple[int, int, int]:
        count = len(self.controller.get_state().options) if self.controller else 0
        scroll_height = max(count * LIST_ROW_HEIGHT, LIST_HEIGHT)
        return scroll_height - LIST_HEIGHT, LIST_HEIGHT, scroll_height


def build_config(config: HelperConfig, logger: ColorLogger) -> SelectorConfig:
    """Build the selector configuration from the environment.

    Args:
        config (HelperConfig): The configuration helper.
        logger (ColorLogger): Used by the on_change callback.

    Returns:
        SelectorConfig: A SinglePageConfig, or a PaginatedConfig if AUTOCOMPLETE_INFINITE is set.

    Raises:
        ValueError: If AUTOCOMPLETE_URL is missing or a value is malformed.
    """
    def on_change(value: Any, item: Any) -> None:
        logger.info("on_change value=%r item=%r", value, item, color="green")

    common: dict[str, Any] = {
        "url": config.get_string_val("AUTOCOMPLETE_URL"),
        "value_field": config.get_string_val("AUTOCOMPLETE_VALUE_FIELD", default="id"),
        "label_field": config.get_string_val("AUTOCOMPLETE_LABEL_FIELD", default="firstname"),
        "options_path": config.get_string_val("AUTOCOMPLETE_OPTIONS_PATH", default="") or None,
        "searchable": config.get_bool_val("AUTOCOMPLETE_SEARCHABLE", default=True),
        "query_params": config.get_dict_val("AUTOCOMPLETE_QUERY_PARAMS", default={}),
        "on_change": on_change,
    }
    if not config.get_bool_val("AUTOCOMPLETE_INFINITE", default=False):
        return SinglePageConfig(**common)

    page_size = int(config.get_number_val("AUTOCOMPLETE_PAGE_SIZE", default=10))

    def get_next_page_param(last_page: Any, all_pages: list[Any]) -> dict | None:
        next_page = last_page.get("next") if isinstance(last_page, dict) else None
        return {"page": next_page, "page_size": page_size} if next_page else None

    return PaginatedConfig(
        **{**common, "options_path": common["options_path"] or "results"},
        initial_page_param={"page": 1, "page_size": page_size},
        get_next_page_param=get_next_page_param,
    )


async def main() -> None:
    """Run the demo selector once."""
    logger = setup_logging(log_to_file=False)
    config = HelperConfig(logger=logger)
    fetch_client = FetchClientManager(helper_config=config).get_client()
    cache = QueryCache(helper_config=config)
    renderer = ConsoleRenderer(logger)
    controller = AutocompleteController(
        helper_config=config,
        config=build_config(config, logger),
        cache=cache,
        fetch_client=fetch_client,
        on_state_change=renderer.render,
    )
    renderer.controller = controller

    search_terms = config.get_list_val("AUTOCOMPLETE_SEARCH_TERMS", default=[])
    scrolls = int(config.get_number_val("AUTOCOMPLETE_SCROLLS", default=2))

    await fetch_client.boot()
    try:
        await controller.on_focus()
        for term in search_terms:
            await controller.on_input_change(term)
        if controller.is_infinite():
            for _ in range(scrolls):
                await controller.on_list_scroll(*renderer.scroll_to_end())

        options = controller.get_state().options
        if options:
            controller.on_select(options[0])
        else:
            logger.warning("No options loaded, nothing to select.")
        logger.info("Query cache holds %d entr(y/ies).", len(cache))
    finally:
        await fetch_client.close()


if __name__ == "__main__":
    asyncio.run(main())
