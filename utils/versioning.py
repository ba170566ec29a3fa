from __future__ import annotations
import logging
import re
from typing import Optional
from urllib.parse import parse_qs

from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from config import settings

logger = logging.getLogger(__name__)

SUPPORTED_VERSIONS = ("1.0", "2.0")
VERSION_HEADER = "x-api-version"
VERSION_QUERY = "api-version"
REPORT_HEADER = b"api-supported-versions"

# /api/<resource>[/...] without an explicit v{n} segment
_UNVERSIONED = re.compile(r"^/api/(?!v\d+(?:\.\d+)?(?:/|$))(?P<rest>.+)$")
_VERSION_RE = re.compile(r"^(?P<major>\d+)(?:\.(?P<minor>\d+))?$")


def normalize_version(raw: Optional[str]) -> Optional[str]:
    """'2' / '2.0' -> '2.0'; anything unsupported -> None."""
    if raw is None:
        return None
    m = _VERSION_RE.match(raw.strip())
    if not m:
        return None
    v = f"{int(m.group('major'))}.{int(m.group('minor') or 0)}"
    return v if v in SUPPORTED_VERSIONS else None


def _requested_version(scope: Scope) -> Optional[str]:
    for name, value in scope.get("headers") or []:
        if name.decode("latin-1").lower() == VERSION_HEADER:
            return value.decode("latin-1")
    qs = parse_qs((scope.get("query_string") or b"").decode("latin-1"))
    values = qs.get(VERSION_QUERY)
    return values[0] if values else None


class ApiVersionMiddleware:
    """
    Routes /api/<resource> to /api/v{major}/<resource> using the X-API-Version
    header or the api-version query parameter (header first, default
    settings.DEFAULT_API_VERSION), and reports supported versions on every
    /api response.
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or not scope["path"].startswith("/api/"):
            await self.app(scope, receive, send)
            return

        m = _UNVERSIONED.match(scope["path"])
        if m:
            raw = _requested_version(scope) or settings.DEFAULT_API_VERSION
            version = normalize_version(raw)
            if version is None:
                logger.warning("Versão de API não suportada: %s", raw)
                resp = JSONResponse(
                    status_code=400,
                    content={
                        "message": f"Versão de API '{raw}' não suportada. "
                                   f"Versões suportadas: {', '.join(SUPPORTED_VERSIONS)}"
                    },
                    headers={REPORT_HEADER.decode(): ", ".join(SUPPORTED_VERSIONS)},
                )
                await resp(scope, receive, send)
                return
            major = version.split(".")[0]
            scope = dict(scope)
            scope["path"] = f"/api/v{major}/{m.group('rest')}"
            scope["raw_path"] = scope["path"].encode("latin-1")

        async def send_with_versions(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers") or [])
                headers.append((REPORT_HEADER, ", ".join(SUPPORTED_VERSIONS).encode("latin-1")))
                message = {**message, "headers": headers}
            await send(message)

        await self.app(scope, receive, send_with_versions)
