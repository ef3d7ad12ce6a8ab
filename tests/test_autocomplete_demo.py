import logging

import pytest

from services.autocomplete.autocomplete_demo import ConsoleRenderer, build_config
from shared.logging.logging_setup import ColorLogger
from shared.models.field import FieldPath
from shared.models.selector import ControllerState, PaginatedConfig, SinglePageConfig

DEMO_KEYS = (
    "AUTOCOMPLETE_URL",
    "AUTOCOMPLETE_VALUE_FIELD",
    "AUTOCOMPLETE_LABEL_FIELD",
    "AUTOCOMPLETE_OPTIONS_PATH",
    "AUTOCOMPLETE_SEARCHABLE",
    "AUTOCOMPLETE_QUERY_PARAMS",
    "AUTOCOMPLETE_INFINITE",
    "AUTOCOMPLETE_PAGE_SIZE",
)


@pytest.fixture
def logger() -> ColorLogger:
    return ColorLogger(logging.getLogger("tests"))


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in DEMO_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_single_page_config_from_env(helper_config, logger, monkeypatch) -> None:
    monkeypatch.setenv("AUTOCOMPLETE_URL", "http://localhost:8000/users")
    monkeypatch.setenv("AUTOCOMPLETE_QUERY_PARAMS", "[limit=20]")

    config = build_config(helper_config, logger)

    assert isinstance(config, SinglePageConfig)
    assert config.value_field == FieldPath(path="id")
    assert config.label_field == FieldPath(path="firstname")
    assert config.options_path is None
    assert config.searchable
    assert config.query_params == {"limit": 20}


def test_paginated_config_from_env(helper_config, logger, monkeypatch) -> None:
    monkeypatch.setenv("AUTOCOMPLETE_URL", "http://localhost:8000/users/paged")
    monkeypatch.setenv("AUTOCOMPLETE_INFINITE", "true")
    monkeypatch.setenv("AUTOCOMPLETE_PAGE_SIZE", "5")

    config = build_config(helper_config, logger)

    assert isinstance(config, PaginatedConfig)
    assert config.options_path == FieldPath(path="results")
    assert config.initial_page_param == {"page": 1, "page_size": 5}
    assert config.get_next_page_param({"results": [], "next": 2}, []) == {"page": 2, "page_size": 5}
    assert config.get_next_page_param({"results": [], "next": None}, []) is None


def test_url_is_required(helper_config, logger) -> None:
    with pytest.raises(ValueError):
        build_config(helper_config, logger)


def test_renderer_scroll_geometry_without_controller(logger) -> None:
    renderer = ConsoleRenderer(logger)
    renderer.render(ControllerState(input_text="al", options=[{"id": 1}]))

    assert renderer.scroll_to_end() == (0, 200, 200)
