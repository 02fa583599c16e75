# token_manager.py
import asyncio
from datetime import timedelta
from typing import Any
import httpx
from epson_connect.exceptions import ApiError, AuthenticationError
from epson_connect.models.session import SessionState, utcnow
from epson_connect.utils.logger import logger

TOKEN_PATH = "/api/1/printing/oauth2/auth/token?subject=printer"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
EMPTY_RESPONSE_MESSAGE = "Request was successful, but no data was returned."


def empty_response() -> dict[str, str]:
    return {"message": EMPTY_RESPONSE_MESSAGE}


def parse_response(response: httpx.Response) -> Any:
    """
    Normalize a service response body.

    Bodies declared as non-JSON are wrapped as {"code": <text>}, a body
    carrying a code is an application-level error, and an empty body becomes
    the success message. An undeclared body that does not decode is returned
    as raw text.
    """
    content_type = response.headers.get("content-type")
    if content_type and "application/json" not in content_type:
        # blank text is an empty reply, not an error code
        body = {"code": response.text} if response.text.strip() else None
    elif response.content.strip():
        try:
            body = response.json()
        except ValueError:
            body = response.text
    else:
        body = None

    if isinstance(body, dict) and body.get("code"):
        raise ApiError(str(body["code"]))

    if not body:
        return empty_response()
    return body


class AuthContext:
    """
    Owns the bearer session of one printer and wraps every outbound call.

    The first exchange is a password grant for the printer's email address,
    later ones use the refresh token once the access token has expired.
    Concurrent callers that observe an expired token share one exchange.
    """

    def __init__(
        self,
        base_url: str,
        printer_email: str,
        client_id: str,
        client_secret: str,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
        refresh_skew_seconds: int = 0,
    ):
        self.base_url = base_url.rstrip("/")
        self.printer_email = printer_email
        self.client_id = client_id
        self.client_secret = client_secret
        self.refresh_skew_seconds = refresh_skew_seconds

        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)
        self._lock = asyncio.Lock()
        self._state = SessionState()

    @property
    def session(self) -> SessionState:
        return self._state

    @property
    def http_client(self) -> httpx.AsyncClient:
        return self._http

    @property
    def device_id(self) -> str:
        return self._state.subject_id

    @property
    def default_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._state.access_token}",
            "Content-Type": "application/json",
        }

    def _is_valid(self) -> bool:
        return self._state.authenticated and utcnow() < (
            self._state.expires_at - timedelta(seconds=self.refresh_skew_seconds))

    async def initialize(self) -> None:
        await self.ensure_authenticated()

    async def ensure_authenticated(self) -> None:
        """
        Make sure a valid access token is held, exchanging credentials if needed.
        """
        if self._is_valid():
            return

        async with self._lock:
            if self._is_valid():
                return

            await self._exchange()

    async def _exchange(self) -> None:
        if self._state.authenticated:
            grant_type = "refresh_token"
            data = {
                "grant_type": grant_type,
                "refresh_token": self._state.refresh_token,
            }
        else:
            # The password stays empty, the client credentials are the real secret
            grant_type = "password"
            data = {
                "grant_type": grant_type,
                "username": self.printer_email,
                "password": "",
            }

        headers = {"Content-Type": FORM_CONTENT_TYPE}
        logger.debug(f"Requesting access token with {grant_type} grant")

        try:
            body = await self.send("POST", TOKEN_PATH, data, headers,
                                   (self.client_id, self.client_secret))
        except httpx.HTTPStatusError as exc:
            raise AuthenticationError(
                f"Token request failed ({exc.response.status_code}): "
                f"{exc.response.text}") from exc
        except Exception as exc:
            raise AuthenticationError(f"Token request failed: {exc}") from exc

        if not isinstance(body, dict):
            raise AuthenticationError(f"Unexpected token response: {body!r}")
        if body.get("error"):
            raise AuthenticationError(str(body["error"]))

        access_token = body.get("access_token")
        subject_id = body.get("subject_id")
        try:
            expires_in = float(body["expires_in"])
        except (KeyError, TypeError, ValueError) as exc:
            raise AuthenticationError(
                f"Token response has no valid expires_in: {exc}") from exc
        if not access_token or not subject_id:
            raise AuthenticationError(
                "Token response missing access_token or subject_id")

        self._state.access_token = access_token
        self._state.subject_id = subject_id
        self._state.expires_at = utcnow() + timedelta(seconds=expires_in)
        if body.get("refresh_token"):
            self._state.refresh_token = body["refresh_token"]

        logger.info(f"Authenticated printer {subject_id} ({grant_type} grant), "
                    f"token valid for {expires_in:.0f}s")

    async def deauthenticate(self) -> Any:
        """
        Remove the printer's registration for this client.
        No authenticated call should follow on this instance.
        """
        logger.info(f"Deauthenticating printer {self._state.subject_id}")
        return await self.send(
            "DELETE", f"/api/1/printing/printers/{self._state.subject_id}")

    async def send(
        self,
        method: str,
        path: str,
        body: Any = None,
        headers: dict[str, str] | None = None,
        basic_auth: tuple[str, str] | None = None,
    ) -> Any:
        """
        Perform a request against the service and return the normalized body.

        Without basic_auth the call is bearer-authenticated: the token is
        checked (and renewed if needed) before the default headers are built.
        """
        if basic_auth is None:
            await self.ensure_authenticated()

        headers = headers or self.default_headers
        request_kwargs: dict[str, Any] = {"headers": headers}
        if basic_auth is not None:
            request_kwargs["auth"] = httpx.BasicAuth(*basic_auth)

        if isinstance(body, (bytes, bytearray)):
            request_kwargs["content"] = bytes(body)
        elif body is not None and FORM_CONTENT_TYPE in headers.get("Content-Type", ""):
            request_kwargs["data"] = body
        elif body is not None:
            request_kwargs["json"] = body

        logger.debug(f"{method.upper()} {path}")
        response = await self._http.request(method.upper(), self.base_url + path,
                                            **request_kwargs)
        response.raise_for_status()
        return parse_response(response)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()
