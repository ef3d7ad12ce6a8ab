"""Compose request URLs from a base url, static params and the typed search text."""

from urllib.parse import urlencode

from shared.models.query import QueryParams, Scalar

SEARCH_PARAM = "search"


def _to_query_value(value: Scalar) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_url(base: str, params: QueryParams | None = None, search_text: str | None = None, searchable: bool = False) -> str:
    """Append the search text and the static params to a base url.

    The search param goes first, followed by `params` in iteration order. Values are
    form-encoded. If the base already carries a query string, the new pairs are joined with `&`.

    Args:
        base (str): Base url, may already contain a query string.
        params (QueryParams | None): Static params for every request.
        search_text (str | None): Raw text typed by the user.
        searchable (bool): Whether the search text is sent at all.

    Returns:
        str: The full url. The base unchanged if there is nothing to append.
    """
    pairs: list[tuple[str, str]] = []
    if searchable and search_text:
        pairs.append((SEARCH_PARAM, search_text))
    for key, value in (params or {}).items():
        pairs.append((key, _to_query_value(value)))

    if not pairs:
        return base
    separator = "&" if "?" in base else "?"
    return f"{base}{separator}{urlencode(pairs)}"
