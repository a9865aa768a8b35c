"""Request/Response envelopes for wallet server communication.

JSON over HTTP POST, one envelope per request body.

Request:  {"method": "getdlc", "params": ["9c1f..."]}
Response: {"result": {...}}
Error:    {"result": null, "error": "DLC not found"}
"""

import json
from dataclasses import dataclass, field
from typing import Any, Self


@dataclass(frozen=True)
class Request:
    """Server request: a method name with ordered positional arguments."""

    method: str
    params: list[Any] = field(default_factory=list)

    @classmethod
    def build(cls, method: str, *params: Any) -> Self:  # noqa: ANN401
        """Build a request from a method name and positional arguments."""
        return cls(method=method, params=list(params))


@dataclass(frozen=True)
class Response:
    """Server response: exactly one of ``result`` or ``error`` is meaningful.

    A success status from the server does not imply ``ok``; callers must check ``error``.
    """

    result: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """True when the server did not report an application-level error."""
        return self.error is None


def encode_request(req: Request) -> bytes:
    """Serialize a Request to a JSON body."""
    return json.dumps({"method": str(req.method), "params": req.params}).encode()


def decode_response(data: bytes) -> Response:
    """Deserialize a JSON body into a Response.

    Raises:
        ValueError: The body is not JSON, or not a JSON object.

    """
    obj = json.loads(data)
    if not isinstance(obj, dict):
        raise ValueError(f"expected a JSON object, got {type(obj).__name__}")
    return Response(result=obj.get("result"), error=obj.get("error"))
