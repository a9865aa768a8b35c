"""Asynchronous client for wallet server communication."""

import logging

import httpx

from dlcwallet.config import basic_auth_header
from dlcwallet.server.protocol import Request, Response, decode_response, encode_request

logger = logging.getLogger(__name__)


class ServerError(Exception):
    """Transport-level failure talking to the wallet server."""

    def __init__(self, code: str, message: str) -> None:
        """Initialize with a machine-readable code and a human-readable message.

        Args:
            code: Machine-readable error code (e.g. "http_error").
            message: Human-readable error description, the server's body text for HTTP errors.

        """
        super().__init__(message)
        self.code = code


class ServerClient:
    """Client that posts JSON envelopes to the single configured wallet server endpoint."""

    def __init__(self, url: str, authorization: str = "", *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        """Initialize client with endpoint settings.

        Args:
            url: Wallet server endpoint.
            authorization: Raw Authorization header value, empty for none.
            transport: Optional httpx transport, used to route requests somewhere other than the network.

        """
        self._url = url
        self._authorization = authorization
        self._transport = transport

    @property
    def url(self) -> str:
        """Currently configured endpoint."""
        return self._url

    @property
    def authorization(self) -> str:
        """Currently configured Authorization header value."""
        return self._authorization

    # --- Configuration (last write wins, not validated) ---

    def configure_server_url(self, url: str) -> None:
        """Set the wallet server endpoint."""
        logger.debug("configure_server_url %s", url)
        self._url = url

    def configure_authorization_header(self, header: str) -> None:
        """Set the raw Authorization header value."""
        logger.debug("configure_authorization_header")
        self._authorization = header

    def configure_authorization_from_user_password(self, user: str, password: str) -> None:
        """Set a basic-auth Authorization header from a user/password pair."""
        logger.debug("configure_authorization_from_user_password %s", user)
        self._authorization = basic_auth_header(user, password)

    # --- Messaging ---

    async def send(self, request: Request | None) -> Response:
        """Send a request and return the decoded response envelope.

        The ``error`` field of the envelope is not inspected here.

        Raises:
            ServerError: Missing request (code: ``null_message``), network failure (code: ``connection_error``),
                non-success HTTP status (code: ``http_error``, message is the response body), or a success status
                whose body is not a JSON object (code: ``invalid_response``).

        """
        if request is None:
            raise ServerError("null_message", "Cannot send an empty message.")

        headers = {"Content-Type": "application/json"}
        if self._authorization:
            headers["Authorization"] = self._authorization

        try:
            # No timeout at this layer: a hung server call hangs the caller
            async with httpx.AsyncClient(transport=self._transport, timeout=None) as client:
                resp = await client.post(self._url, content=encode_request(request), headers=headers)
        except httpx.HTTPError as e:
            raise ServerError("connection_error", str(e) or type(e).__name__) from e

        if not resp.is_success:
            logger.debug("%s failed with HTTP %d", request.method, resp.status_code)
            raise ServerError("http_error", resp.text)
        try:
            return decode_response(resp.content)
        except ValueError as e:
            logger.debug("%s answered with an unreadable body", request.method)
            raise ServerError("invalid_response", f"Unreadable response body: {e}") from e

    async def call(self, method: str, *params: object) -> Response:
        """Build a request from a method name and arguments, then send it."""
        return await self.send(Request.build(method, *params))
