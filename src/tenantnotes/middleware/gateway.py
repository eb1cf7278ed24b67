"""Access gateway: CORS and authentication for every inbound request."""

from typing import Iterable, Optional, Sequence

from starlette.datastructures import Headers, MutableHeaders
from starlette.responses import JSONResponse, Response

from ..core.logging import get_logger
from ..core.services.identity import RequestContext, parse_bearer
from ..security.jwt import TokenService

logger = get_logger("gateway")

AUTHENTICATION_REQUIRED = "Authentication required"
INVALID_TOKEN = "Invalid token"
INTERNAL_ERROR = "Internal server error"

DEFAULT_ALLOW_METHODS = ("GET", "POST", "PUT", "DELETE", "OPTIONS")
DEFAULT_ALLOW_HEADERS = ("Content-Type", "Authorization")
DEFAULT_PUBLIC_PREFIXES = ("/api/auth", "/api/health")


def _matches_prefix(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix.rstrip("/") + "/")


class AccessGateway:
    """ASGI middleware and the single authentication point for the API.

    - every response gets the CORS headers
    - OPTIONS is answered with an empty 200 before anything else runs
    - paths under the API prefix that are not public need a valid bearer token;
      the verified identity is stored as ``request.state.request_context``
    - a trailing slash is dropped before routing
    - an unhandled error becomes a 500 ``{"error": ...}`` that still carries CORS
    """

    def __init__(
        self,
        app,
        token_service: TokenService,
        api_prefix: str = "/api",
        public_prefixes: Iterable[str] = DEFAULT_PUBLIC_PREFIXES,
        allow_origin: str = "*",
        allow_methods: Sequence[str] = DEFAULT_ALLOW_METHODS,
        allow_headers: Sequence[str] = DEFAULT_ALLOW_HEADERS,
    ):
        self.app = app
        self.token_service = token_service
        self.api_prefix = api_prefix
        self.public_prefixes = tuple(public_prefixes)
        self.cors_headers = {
            "Access-Control-Allow-Origin": allow_origin,
            "Access-Control-Allow-Methods": ", ".join(allow_methods),
            "Access-Control-Allow-Headers": ", ".join(allow_headers),
        }

    def is_api_path(self, path: str) -> bool:
        return _matches_prefix(path, self.api_prefix)

    def is_public(self, path: str) -> bool:
        return any(_matches_prefix(path, prefix) for prefix in self.public_prefixes)

    def is_protected(self, path: str) -> bool:
        return self.is_api_path(path) and not self.is_public(path)

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_with_cors(message):
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
                headers = MutableHeaders(scope=message)
                for key, value in self.cors_headers.items():
                    headers[key] = value
            await send(message)

        if scope["method"] == "OPTIONS":
            response = Response(status_code=200, headers=self.cors_headers)
            await response(scope, receive, send)
            return

        path = scope["path"]
        if len(path) > 1 and path.endswith("/"):
            # /api/notes/ and /api/notes route the same way
            path = path.rstrip("/") or "/"
            scope = dict(scope, path=path)

        if self.is_protected(path):
            context = self.authenticate(Headers(scope=scope).get("authorization"), path)
            if isinstance(context, Response):
                await context(scope, receive, send_with_cors)
                return
            scope.setdefault("state", {})["request_context"] = context

        try:
            await self.app(scope, receive, send_with_cors)
        except Exception:
            logger.error(
                "Unhandled error",
                exc_info=True,
                extra={"path": path, "method": scope["method"]},
            )
            if response_started:
                raise
            response = JSONResponse({"error": INTERNAL_ERROR}, status_code=500)
            await response(scope, receive, send_with_cors)

    def authenticate(self, authorization: Optional[str], path: str) -> RequestContext | Response:
        """Verify the bearer token, or build the 401 response to send back."""
        token = parse_bearer(authorization)
        if token is None:
            logger.info("Rejected request without bearer token", extra={"path": path})
            return JSONResponse({"error": AUTHENTICATION_REQUIRED}, status_code=401)

        claims = self.token_service.verify(token)
        if claims is None:
            logger.info("Rejected request with invalid token", extra={"path": path})
            return JSONResponse({"error": INVALID_TOKEN}, status_code=401)

        return RequestContext.from_claims(claims)
