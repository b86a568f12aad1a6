"""
Upload body size guard.

Rejects oversized PDF uploads before the multipart body is parsed, so a
large file is never spooled by the form parser.

Dependencies: starlette, second_brain.api.errors
System role: Request body limit for the upload route
"""

import logging

from fastapi import HTTPException, status
from fastapi.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from second_brain.api.errors import error_payload

logger = logging.getLogger(__name__)

# Room for multipart boundaries, part headers and the title field
MULTIPART_OVERHEAD_BYTES = 64 * 1024


class UploadSizeLimitMiddleware:
    """
    Cap the request body of POST uploads.

    A declared Content-Length over the cap is answered with 400 without
    reading the body. Bodies without a usable Content-Length are counted as
    they stream in and the request fails once the cap is crossed.
    """

    def __init__(
        self,
        app: ASGIApp,
        path: str,
        max_upload_bytes: int,
        expose_details: bool = True,
    ) -> None:
        self.app = app
        self.path = path
        self.max_upload_bytes = max_upload_bytes
        self.max_body_bytes = max_upload_bytes + MULTIPART_OVERHEAD_BYTES
        self.expose_details = expose_details

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["method"] != "POST" or scope["path"] != self.path:
            await self.app(scope, receive, send)
            return

        declared = self._declared_length(scope)
        if declared is not None and declared > self.max_body_bytes:
            logger.warning(
                "Upload rejected before parsing",
                extra={"path": scope["path"], "content_length": declared},
            )
            response = JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content=error_payload(
                    "validation_error",
                    "File too large",
                    {"max_bytes": self.max_upload_bytes, "received_bytes": declared},
                    self.expose_details,
                ),
            )
            await response(scope, receive, send)
            return

        received = 0

        async def counting_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_bytes:
                    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="File too large")
            return message

        await self.app(scope, counting_receive, send)

    @staticmethod
    def _declared_length(scope: Scope) -> int | None:
        for name, value in scope["headers"]:
            if name == b"content-length":
                try:
                    return int(value)
                except ValueError:
                    return None
        return None
