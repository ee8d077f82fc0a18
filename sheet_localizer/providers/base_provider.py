"""Base provider class for translation services."""

from abc import ABC, abstractmethod
import logging

logger = logging.getLogger(__name__)


class BaseProvider(ABC):
    """Abstract base class for translation providers.

    Providers are thin adapters around one chat-style service. They raise on
    failure; batching and failure absorption live in the client.
    """

    #: Whether the service can be asked for a JSON object reply
    supports_json = False

    def __init__(self, api_key: str, model: str, timeout: float = 90.0):
        """Initialize the provider.

        Args:
            api_key: API key for the service
            model: Model name to use
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.model = model
        self.timeout = timeout

    @abstractmethod
    async def complete(self, system: str, prompt: str, json_mode: bool = False) -> str:
        """Send one request and return the reply text.

        Args:
            system: System instructions
            prompt: User message holding the numbered texts
            json_mode: Ask the service for a JSON object reply

        Returns:
            Raw reply content

        Raises:
            TranslationServiceError: If the service fails or replies with nothing
        """
        pass

    @abstractmethod
    async def ping(self) -> None:
        """Make a minimal request to confirm the service accepts our credentials.

        Raises:
            TranslationServiceError: If the service cannot be reached
        """
        pass
