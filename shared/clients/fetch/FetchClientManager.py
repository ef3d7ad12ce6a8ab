from shared.helper.HelperConfig import HelperConfig
from shared.clients.fetch.FetchClientInterface import FetchClientInterface

class FetchClientManager:
    """
    Manager class to handle the Fetch client based on configuration.
    """

    def __init__(self, helper_config: HelperConfig):
        self.helper_config = helper_config
        self.logging = helper_config.get_logger()
        self.client = self._initialize_client()

    def _get_engine_from_env(self) -> str:
        """
        Reads the Fetch engine from ENV configuration. Defaults to "Http".

        Returns:
            str: The capitalized name of the Fetch engine.
        """
        engine = self.helper_config.get_string_val("FETCH_ENGINE", default="http")
        return engine.strip().lower().capitalize()

    def _initialize_client(self) -> FetchClientInterface:
        """
        Instantiates the Fetch client for the configured engine.

        Returns:
            FetchClientInterface: An instance of the Fetch client.

        Raises:
            ValueError: If the engine is unknown.
        """
        engine = self._get_engine_from_env()
        className = f"FetchClient{engine}"
        try:
            module = __import__(
                f"shared.clients.fetch.{engine.lower()}.{className}",
                fromlist=[className],
            )
            client_class = getattr(module, className)
        except (ImportError, AttributeError) as e:
            raise ValueError(f"Unsupported Fetch engine specified: '{engine}'. Error: {e}")
        self.logging.debug("Instantiated Fetch client for engine: %s", engine)
        return client_class(helper_config=self.helper_config)

    def get_client(self) -> FetchClientInterface:
        """
        Returns the instantiated Fetch client.

        Returns:
            FetchClientInterface: The Fetch client instance.
        """
        return self.client
