"""Unit tests for the access gateway (tenantnotes/middleware/gateway.py)."""

import uuid
from typing import Optional

import pytest
from fastapi import Depends, FastAPI, Request
from fastapi.testclient import TestClient

from tenantnotes.core.models.user import Role
from tenantnotes.core.services.identity import RequestContext
from tenantnotes.middleware.auth import get_request_context
from tenantnotes.middleware.gateway import AccessGateway
from tenantnotes.security.jwt import TokenClaims, TokenService

SECRET = "gateway-secret"

CORS = {
    "access-control-allow-origin": "*",
    "access-control-allow-methods": "GET, POST, PUT, DELETE, OPTIONS",
    "access-control-allow-headers": "Content-Type, Authorization",
}


def build_app(token_service: TokenService) -> FastAPI:
    app = FastAPI()

    @app.get("/api/notes")
    async def notes(request: Request):
        context: RequestContext = request.state.request_context
        return {
            "user_id": str(context.user_id),
            "tenant_id": str(context.tenant_id),
            "role": context.role.value,
            "email": context.email,
        }

    @app.get("/api/context")
    async def context(ctx: RequestContext = Depends(get_request_context)):
        return {"email": ctx.email}

    @app.post("/api/auth/login")
    async def login():
        return {"ok": True}

    @app.get("/api/health")
    async def health():
        return {"status": "healthy"}

    @app.get("/api/authors")
    async def authors():
        return {"authors": []}

    @app.get("/api/boom")
    async def boom():
        raise RuntimeError("database exploded")

    @app.get("/")
    async def root():
        return {"message": "hi"}

    @app.get("/open-context")
    async def open_context(ctx: RequestContext = Depends(get_request_context)):
        return {"email": ctx.email}

    app.add_middleware(AccessGateway, token_service=token_service)
    return app


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(SECRET)


@pytest.fixture
def client(token_service) -> TestClient:
    return TestClient(build_app(token_service))


@pytest.fixture
def claims() -> TokenClaims:
    return TokenClaims(
        user_id=uuid.uuid4(),
        tenant_id=uuid.uuid4(),
        role=Role.USER,
        email="user@acme.test",
    )


def _bearer(token: Optional[str]) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"} if token is not None else {}


def _assert_cors(resp):
    for key, value in CORS.items():
        assert resp.headers.get(key) == value


def test_valid_token_reaches_handler_with_context(client, token_service, claims):
    resp = client.get("/api/notes", headers=_bearer(token_service.issue(claims)))
    assert resp.status_code == 200
    assert resp.json() == {
        "user_id": str(claims.user_id),
        "tenant_id": str(claims.tenant_id),
        "role": "USER",
        "email": "user@acme.test",
    }
    _assert_cors(resp)


def test_context_dependency_reads_gateway_state(client, token_service, claims):
    resp = client.get("/api/context", headers=_bearer(token_service.issue(claims)))
    assert resp.status_code == 200
    assert resp.json() == {"email": "user@acme.test"}


def test_missing_header_is_rejected(client):
    resp = client.get("/api/notes")
    assert resp.status_code == 401
    assert resp.json() == {"error": "Authentication required"}
    _assert_cors(resp)


@pytest.mark.parametrize("value", ["Basic abc", "bearer abc", "Bearer", "Bearer ", "Token abc"])
def test_wrong_scheme_is_rejected(client, value):
    resp = client.get("/api/notes", headers={"Authorization": value})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Authentication required"}


def test_garbage_token_is_rejected(client):
    resp = client.get("/api/notes", headers=_bearer("not-a-token"))
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid token"}
    _assert_cors(resp)


def test_token_from_other_secret_is_rejected(client, claims):
    foreign = TokenService("other-secret").issue(claims)
    resp = client.get("/api/notes", headers=_bearer(foreign))
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid token"}


def test_public_routes_need_no_token(client):
    resp = client.post("/api/auth/login")
    assert resp.status_code == 200
    _assert_cors(resp)

    resp = client.get("/api/health")
    assert resp.status_code == 200
    _assert_cors(resp)


def test_public_prefix_matches_whole_segments(client):
    # /api/authors only shares a string prefix with /api/auth
    resp = client.get("/api/authors")
    assert resp.status_code == 401


def test_non_api_paths_pass_through(client):
    resp = client.get("/")
    assert resp.status_code == 200
    _assert_cors(resp)


def test_context_dependency_without_gateway_identity(client):
    resp = client.get("/open-context")
    assert resp.status_code == 401


@pytest.mark.parametrize("path", ["/api/notes", "/api/auth/login", "/api/anything/at/all", "/"])
def test_preflight_short_circuits(client, path):
    resp = client.options(path)
    assert resp.status_code == 200
    assert resp.content == b""
    _assert_cors(resp)


def test_preflight_ignores_bad_credentials(client):
    resp = client.options("/api/notes", headers=_bearer("garbage"))
    assert resp.status_code == 200


def test_unknown_protected_route_still_requires_token(client):
    resp = client.get("/api/missing")
    assert resp.status_code == 401


def test_unknown_route_with_token_is_not_found(client, token_service, claims):
    resp = client.get("/api/missing", headers=_bearer(token_service.issue(claims)))
    assert resp.status_code == 404
    _assert_cors(resp)


def test_custom_cors_values(token_service):
    app = FastAPI()

    @app.get("/")
    async def root():
        return {}

    app.add_middleware(
        AccessGateway,
        token_service=token_service,
        allow_origin="https://app.example.com",
        allow_methods=["GET"],
        allow_headers=["Authorization"],
    )
    resp = TestClient(app).get("/")
    assert resp.headers["access-control-allow-origin"] == "https://app.example.com"
    assert resp.headers["access-control-allow-methods"] == "GET"
    assert resp.headers["access-control-allow-headers"] == "Authorization"


def test_path_classification(token_service):
    gateway = AccessGateway(app=None, token_service=token_service)
    assert gateway.is_protected("/api/notes")
    assert gateway.is_protected("/api/notes/123")
    assert gateway.is_protected("/api/tenants/acme/upgrade")
    assert not gateway.is_protected("/api/auth/login")
    assert not gateway.is_protected("/api/auth")
    assert not gateway.is_protected("/api/health")
    assert not gateway.is_protected("/docs")
    assert not gateway.is_protected("/apis")


def test_unhandled_error_is_a_500_with_cors(token_service, claims):
    client = TestClient(build_app(token_service), raise_server_exceptions=False)
    resp = client.get("/api/boom", headers=_bearer(token_service.issue(claims)))
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}
    _assert_cors(resp)


def test_unhandled_error_detail_is_not_leaked(token_service, claims):
    client = TestClient(build_app(token_service), raise_server_exceptions=False)
    resp = client.get("/api/boom", headers=_bearer(token_service.issue(claims)))
    assert "exploded" not in resp.text


def test_trailing_slash_routes_like_bare_path(client, token_service, claims):
    token = token_service.issue(claims)
    resp = client.get("/api/notes/", headers=_bearer(token), follow_redirects=False)
    assert resp.status_code == 200
    assert resp.json()["email"] == "user@acme.test"
    _assert_cors(resp)

    resp = client.post("/api/auth/login/", follow_redirects=False)
    assert resp.status_code == 200

    resp = client.get("/api/health/", follow_redirects=False)
    assert resp.status_code == 200


def test_trailing_slash_does_not_skip_authentication(client):
    resp = client.get("/api/notes/")
    assert resp.status_code == 401
    assert resp.json() == {"error": "Authentication required"}

    # /api/authors/ is still not under /api/auth
    resp = client.get("/api/authors/")
    assert resp.status_code == 401
