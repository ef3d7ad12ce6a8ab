# tests/conftest.py
import asyncio
import logging
from typing import Any, Callable

import pytest

from shared.cache.QueryCache import QueryCache
from shared.clients.fetch.FetchClientInterface import FetchClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.models.config import EnvConfig


class FakeFetchClient(FetchClientInterface):
    """Fetch client that records urls and answers through a responder function.

    With manual=True every request waits on a future until the test calls
    resolve() or fail(), which makes response ordering controllable.
    """

    def __init__(self, helper_config: HelperConfig, responder: Callable[[str], Any] | None = None, manual: bool = False):
        super().__init__(helper_config=helper_config)
        self.responder = responder or (lambda url: [])
        self.manual = manual
        self.calls: list[str] = []
        self.pending: dict[str, asyncio.Future] = {}

    def _get_engine_name(self) -> str:
        return "Fake"

    def _get_required_config(self) -> list[EnvConfig]:
        return []

    def _get_auth_header(self) -> dict:
        return {}

    def _get_base_url(self) -> str:
        return ""

    async def fetch_page(self, url: str) -> list | dict:
        self.calls.append(url)
        if self.manual:
            future = asyncio.get_running_loop().create_future()
            self.pending[url] = future
            return await future
        return self.responder(url)

    def resolve(self, url: str, body: Any) -> None:
        self.pending.pop(url).set_result(body)

    def fail(self, url: str, exc: Exception) -> None:
        self.pending.pop(url).set_exception(exc)


async def settle(rounds: int = 5) -> None:
    """Let scheduled tasks run up to their next suspension point."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture
def helper_config() -> HelperConfig:
    return HelperConfig(logger=logging.getLogger("tests"))


@pytest.fixture
def cache(helper_config) -> QueryCache:
    return QueryCache(helper_config=helper_config)


@pytest.fixture
def users() -> list[dict]:
    return [
        {"id": 1, "name": "a", "company": {"name": "Acme"}},
        {"id": 2, "name": "b", "company": {"name": "Globex"}},
    ]
