"""Server subsystem: envelopes, HTTP client, and availability polling."""

from dlcwallet.server.client import ServerClient as ServerClient
from dlcwallet.server.client import ServerError as ServerError
from dlcwallet.server.poller import wait_for_server as wait_for_server
from dlcwallet.server.protocol import Request as Request
from dlcwallet.server.protocol import Response as Response
