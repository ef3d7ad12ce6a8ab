import json

import httpx

from shared.clients.fetch.FetchClientInterface import FetchClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.models.config import EnvConfig
from shared.models.errors import NetworkError, ParseError


class FetchClientHttp(FetchClientInterface):
    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)
        self._base_url = self.get_config_val("BASE_URL", default="", val_type="string")
        self._api_key = self.get_config_val("API_KEY", default="", val_type="string")

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_engine_name(self) -> str:
        return "Http"

    ################ CONFIG ##################
    def _get_required_config(self) -> list[EnvConfig]:
        return [
            EnvConfig(env_key="BASE_URL", val_type="string", default=""),
            EnvConfig(env_key="API_KEY", val_type="string", default=""),
        ]

    ################ AUTH ##################
    def _get_auth_header(self) -> dict:
        if self._api_key:
            return {"X-API-Key": self._api_key}
        else:
            return {}

    ################ ENDPOINTS ##################
    def _get_base_url(self) -> str:
        return self._base_url

    ##########################################
    ############### REQUESTS #################
    ##########################################

    async def fetch_page(self, url: str) -> list | dict:
        try:
            resp = await self.do_request(method="GET", endpoint=url)
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            self.logging.warning("Fetching %s failed: %s", url, exc)
            raise NetworkError(f"Request to {url} failed: {exc}", url=url) from exc

        if not resp.is_success:
            self.logging.warning("Fetching %s failed with status %d", url, resp.status_code)
            raise NetworkError(
                f"Request to {url} failed with status {resp.status_code}",
                url=url,
                status_code=resp.status_code,
            )

        try:
            body = resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            self.logging.warning("Response from %s is not valid JSON: %s", url, exc)
            raise ParseError(f"Response from {url} is not valid JSON: {exc}", url=url) from exc

        self.logging.debug("Fetched %s (%d bytes)", url, len(resp.content))
        return self.parse_page_body(body, url=url)
