"""Pydantic models for selector configuration and the state exposed to list renderers."""

from typing import Any, Callable

from pydantic import BaseModel, field_validator

from shared.helper.field_path import to_field_spec
from shared.models.field import FieldSpec
from shared.models.query import PageParam, QueryParams, Scalar

# None, a scalar id, a list of ids, a hydrated item or a list of items
SelectionValue = Scalar | list[Any] | Any | None

OnChangeCallback = Callable[[Any, Any], None]
NextPageParamFunction = Callable[[Any, list[Any]], PageParam | None]

DEFAULT_SCROLL_THRESHOLD = 50


class SelectorConfigBase(BaseModel):
    """
    Settings shared by both selector modes.

    Attributes:
        value_field (FieldSpec): Where the reported value/id of an item lives. Accepts a dotted path or a function.
        label_field (FieldSpec): Where the display label of an item lives.
        options_path (FieldSpec | None): Where the options array lives inside a response body. None means the body is the array.
        searchable (bool): If True, typed text is sent as `search` and becomes part of the cache key.
        query_params (QueryParams): Static parameters merged into every request.
        on_change (OnChangeCallback | None): Called with (value, item) or (values, items) on selection.
    """
    value_field: FieldSpec
    label_field: FieldSpec
    options_path: FieldSpec | None = None
    searchable: bool = False
    query_params: QueryParams = {}
    on_change: OnChangeCallback | None = None

    @field_validator("value_field", "label_field", "options_path", mode="before")
    @classmethod
    def _coerce_field_spec(cls, value: Any) -> Any:
        if value is None:
            return None
        return to_field_spec(value)


class SinglePageConfig(SelectorConfigBase):
    """
    One request per query key; the response holds every option.
    """
    url: str


class PaginatedConfig(SelectorConfigBase):
    """
    Options are loaded page by page while the list is scrolled.

    Attributes:
        url (str | Callable): Either a static url (the page param is then merged into the query string) or a function building the url from the page param.
        get_next_page_param (NextPageParamFunction | None): Receives (last_page_body, all_page_bodies) and returns the next page param, or None when there is none.
        initial_page_param (PageParam | None): Page param of the first request.
        scroll_threshold (int): Distance from the scrollable end that counts as "near the end".
    """
    url: str | Callable[[PageParam | None], str]
    get_next_page_param: NextPageParamFunction | None = None
    initial_page_param: PageParam | None = None
    scroll_threshold: int = DEFAULT_SCROLL_THRESHOLD


SelectorConfig = SinglePageConfig | PaginatedConfig


class ControllerState(BaseModel):
    """
    Snapshot handed to the list renderer.
    """
    input_text: str = ""
    focused: bool = False
    options: list[Any] = []
    loading: bool = False
    has_next_page: bool = False
    fetching_next_page: bool = False
    error: str | None = None
