"""Request ID tracing for the search API.

Each HTTP request is bound to one ID for its whole lifetime. A well-formed
X-Request-ID sent by the client is kept, anything else is replaced by a fresh
hex UUID. The ID is echoed on the response, stamped on every log record
emitted while the search runs (see core.logging_config), returned in 502 error
bodies and tagged on Sentry events, so a failed extraction can be traced from
the client's error back to the extractor's log lines.
"""

import contextvars
import re
import uuid

import sentry_sdk
from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

REQUEST_ID_HEADER = "X-Request-ID"

# Echoed into headers and log lines, so keep it short and printable
_VALID_REQUEST_ID = re.compile(r"[A-Za-z0-9._:-]{1,128}")

request_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "imagesearch_request_id", default=""
)


def resolve_request_id(incoming: str | None) -> str:
    """Keep a well-formed client ID, otherwise mint a new one."""
    if incoming and _VALID_REQUEST_ID.fullmatch(incoming):
        return incoming
    return uuid.uuid4().hex


def get_request_id() -> str:
    """ID of the request being served, or an empty string outside one."""
    return request_id_var.get()


class RequestIDMiddleware:
    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        rid = resolve_request_id(Headers(scope=scope).get(REQUEST_ID_HEADER))
        token = request_id_var.set(rid)
        sentry_sdk.set_tag("request_id", rid)

        async def send_with_request_id(message: Message):
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message)[REQUEST_ID_HEADER] = rid
            await send(message)

        try:
            await self.app(scope, receive, send_with_request_id)
        finally:
            request_id_var.reset(token)
