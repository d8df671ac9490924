"""Application class with startup/shutdown lifecycle."""

from docuchat.clients.service import ServiceClient
from docuchat.config.settings import Settings, get_settings
from docuchat.session import Session
from docuchat.utils.logging import get_logger


logger = get_logger(__name__)


class Application:
    """
    Owns the backend client and the single live session.

    Handles:
    - Creating the service client and session on startup
    - Closing the HTTP client on shutdown
    """

    def __init__(self, settings: Settings | None = None):
        self._settings = settings
        self.client: ServiceClient | None = None
        self.session: Session | None = None

    async def startup(self) -> None:
        """Initialize resources on startup."""
        settings = self._settings or get_settings()

        self.client = ServiceClient(
            settings.service_base_url,
            timeout=settings.request_timeout_seconds,
        )
        self.session = Session.from_settings(settings, client=self.client)

        logger.info(
            "Application started",
            service_base_url=settings.service_base_url,
            chat_history_limit=settings.chat_history_limit,
        )

    async def shutdown(self) -> None:
        """Release resources on shutdown."""
        if self.session is not None:
            self.session.reset()
            self.session = None

        if self.client is not None:
            await self.client.close()
            self.client = None

        logger.info("Application stopped")


# Global application instance
app_instance = Application()
