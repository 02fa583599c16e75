"""
Client entry point of the SDK.

- Resolves credentials from explicit arguments, falling back to `config.py` Settings
- Owns the single AuthContext shared by reference with Printer and Scanner
"""

# client.py
from functools import cached_property
import httpx
from epson_connect.api_clients.printer import Printer
from epson_connect.api_clients.scanner import Scanner
from epson_connect.config import get_settings
from epson_connect.exceptions import ClientError
from epson_connect.utils.logger import logger
from epson_connect.utils.token_manager import AuthContext


class Client:
    '''
    Connects one printer to the cloud service.

    Usage:
        async with Client(printer_email=..., client_id=..., client_secret=...) as client:
            job_id = await client.printer.print("report.pdf")
    '''

    def __init__(self,
                 printer_email: str = '',
                 client_id: str = '',
                 client_secret: str = '',
                 base_url: str | None = None,
                 http_client: httpx.AsyncClient | None = None):
        settings = get_settings()

        printer_email = printer_email or settings.EPSON_CONNECT_API_PRINTER_EMAIL
        if not printer_email:
            raise ClientError('Printer Email can not be empty')

        client_id = client_id or settings.EPSON_CONNECT_API_CLIENT_ID
        if not client_id:
            raise ClientError('Client ID can not be empty')

        client_secret = client_secret or settings.EPSON_CONNECT_API_CLIENT_SECRET
        if not client_secret:
            raise ClientError('Client Secret can not be empty')

        base_url = base_url or settings.EPSON_CONNECT_API_BASE_URL
        logger.debug(f"Creating client for {printer_email} against {base_url}")

        self.auth_context = AuthContext(
            base_url=base_url,
            printer_email=printer_email,
            client_id=client_id,
            client_secret=client_secret,
            http_client=http_client,
            timeout=settings.HTTP_TIMEOUT,
        )

    async def initialize(self) -> None:
        await self.auth_context.initialize()

    async def deauthenticate(self) -> None:
        await self.auth_context.deauthenticate()

    async def aclose(self) -> None:
        await self.auth_context.aclose()

    async def __aenter__(self) -> "Client":
        await self.initialize()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def _require_session(self) -> None:
        if not self.auth_context.session.authenticated:
            raise ClientError('Client is not authenticated, call initialize() first')

    @cached_property
    def printer(self) -> Printer:
        self._require_session()
        return Printer(self.auth_context)

    @cached_property
    def scanner(self) -> Scanner:
        self._require_session()
        return Scanner(self.auth_context)
