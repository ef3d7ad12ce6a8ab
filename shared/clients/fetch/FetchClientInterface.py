from abc import abstractmethod
from typing import Any

from shared.clients.ClientInterface import ClientInterface
from shared.helper.HelperConfig import HelperConfig
from shared.models.errors import ParseError


class FetchClientInterface(ClientInterface):
    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_client_type(self) -> str:
        """
        Returns the type of the client. E.g. "fetch"
        """
        return "fetch"

    ##########################################
    ############### REQUESTS #################
    ##########################################

    @abstractmethod
    async def fetch_page(self, url: str) -> list | dict:
        """Read one page of items from the backend.

        No retries are made; retry policies are layered on top by the caller.

        Args:
            url (str): The full request url including the query string.

        Returns:
            list | dict: The decoded body, either the item array or an object containing it.

        Raises:
            NetworkError: If the transport fails or the backend answers with a non-2xx status.
            ParseError: If the body is not JSON, or neither an array nor an object.
        """
        pass

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    def parse_page_body(self, body: Any, url: str = "") -> list | dict:
        """Validate the shape of a decoded page body.

        Args:
            body (Any): The decoded JSON body.
            url (str): The requested url, for error reporting.

        Returns:
            list | dict: The body unchanged.

        Raises:
            ParseError: If the body is neither a JSON array nor a JSON object.
        """
        if not isinstance(body, (list, dict)):
            raise ParseError(
                f"Response from {url} is a JSON {type(body).__name__}, expected an array or an object.",
                url=url,
            )
        return body
