"""Availability polling: block until the wallet server answers."""

import asyncio
import logging
from collections.abc import AsyncIterator

from dlcwallet.server.client import ServerClient, ServerError
from dlcwallet.server.messages import CommonMethod
from dlcwallet.server.protocol import Request, Response

logger = logging.getLogger(__name__)

# Delay between attempts while the server is unreachable, in seconds
OFFLINE_POLL_INTERVAL = 5.0


async def wait_for_server(client: ServerClient, request: Request | None = None, delay: float = OFFLINE_POLL_INTERVAL) -> Response:
    """Send a request until the server answers, and return that answer.

    Retries forever on transport failures with a fixed delay between attempts. An application-level
    error in the answer still counts as the server being reachable.

    Args:
        client: Client to send with.
        request: Request to send, a version query by default.
        delay: Seconds to wait after each failed attempt.

    """
    check = request if request is not None else Request.build(CommonMethod.GET_VERSION)
    attempt = 0
    while True:
        attempt += 1
        try:
            return await client.send(check)
        except ServerError as e:
            logger.debug("Server not available (attempt %d, %s): %s", attempt, e.code, e)
        await asyncio.sleep(delay)


async def poll_stream(
    client: ServerClient, request: Request | None = None, delay: float = OFFLINE_POLL_INTERVAL
) -> AsyncIterator[Response]:
    """Yield the first successful answer, then stop.

    Does not re-poll; iterate a new stream to wait again.
    """
    yield await wait_for_server(client, request, delay)
