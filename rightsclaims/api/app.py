"""FastAPI application for issuing and verifying rights claims.

Endpoints:
  GET    /health                Health check
  POST   /headers               Build an algorithm header from a public key
  POST   /claims                Stamp and identify Create/License claims
  POST   /claims/validate       Validate claims against a metadata document
  POST   /credentials/verify    Verify header + claims + signature (or a token)

Secret keys never reach this service; signing happens on the issuer's side.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import Any
from uuid import uuid4

from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

import rightsclaims
from rightsclaims.auth import require_api_key
from rightsclaims.claims import (
    Algorithm,
    ClaimsType,
    Credential,
    Curve,
    build_header,
    create_claims,
    license_claims,
    validate_claims,
    verify_credential,
)
from rightsclaims.claims.models import VerificationResult
from rightsclaims.config import settings
from rightsclaims.core.encoding import b64url_decode
from rightsclaims.exceptions import (
    CredentialError,
    FailureKind,
    MalformedKeyError,
    RightsClaimsError,
)
from rightsclaims.logging_config import log_startup_info, setup_logging

logger = logging.getLogger("rightsclaims")
_audit_logger = logging.getLogger("rightsclaims.audit")

_STARTUP_TIME: float = 0.0


# ---------------------------------------------------------------------------
# Request/Response schemas
# ---------------------------------------------------------------------------


class HeaderRequest(BaseModel):
    curve: Curve
    public_key: str = Field(
        min_length=1, max_length=256, description="base64url-encoded raw public key"
    )


class ClaimsRequest(BaseModel):
    typ: ClaimsType
    iss: str = Field(min_length=1, max_length=64, description="Issuer address")
    sub: str = Field(min_length=1, max_length=64, description="Metadata content id")
    aud: list[str] | None = Field(default=None, description="License audience addresses")
    exp: int | None = Field(default=None, description="License expiry (Unix seconds)")
    nbf: int | None = Field(default=None, description="License not-before (Unix seconds)")


class ValidateClaimsRequest(BaseModel):
    claims: dict[str, Any]
    metadata: dict[str, Any]


class VerifyCredentialRequest(BaseModel):
    metadata: dict[str, Any]
    token: str | None = Field(default=None, max_length=16384, description="Compact h.c.s form")
    header: dict[str, Any] | None = None
    claims: dict[str, Any] | None = None
    signature: str | None = Field(default=None, max_length=1024, description="base64url")


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    global _STARTUP_TIME
    _STARTUP_TIME = time.monotonic()
    setup_logging()
    log_startup_info()
    yield
    logger.info("Shutdown complete")


_OPENAPI_TAGS = [
    {"name": "Health", "description": "Health checks and version info"},
    {"name": "Headers", "description": "Algorithm headers built from public keys"},
    {"name": "Claims", "description": "Create and License claims construction and validation"},
    {"name": "Credentials", "description": "Signed credential verification"},
]

app = FastAPI(
    title="rightsclaims",
    description="Signed, content-addressed Create and License claims over rights metadata.",
    version=rightsclaims.__version__,
    lifespan=lifespan,
    dependencies=[Depends(require_api_key)],
    openapi_tags=_OPENAPI_TAGS,
)


# ---------------------------------------------------------------------------
# Errors and middleware
# ---------------------------------------------------------------------------
@app.exception_handler(RightsClaimsError)
async def rightsclaims_error_handler(request: Request, exc: RightsClaimsError) -> JSONResponse:
    body = {
        "error": exc.error_type,
        "message": exc.message,
        "request_id": getattr(request.state, "request_id", "unknown"),
    }
    return JSONResponse(body, status_code=exc.status_code)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Cache-Control": "no-store",
}


@app.middleware("http")
async def request_context_middleware(request: Request, call_next) -> Response:
    """Tag the request with a short id, log its outcome, add security headers."""
    request.state.request_id = request_id = uuid4().hex[:8]
    started = time.perf_counter()
    response: Response = await call_next(request)
    duration_ms = round((time.perf_counter() - started) * 1000, 1)

    response.headers.update(_SECURITY_HEADERS)
    response.headers["X-Request-ID"] = request_id
    logger.info(
        "%s %s -> %d in %.1fms [%s]",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
        request_id,
        extra={
            "request_id": request_id,
            "path": request.url.path,
            "method": request.method,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        },
    )
    return response


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


@app.get("/health", tags=["Health"], summary="Health check")
async def health():
    uptime_s = time.monotonic() - _STARTUP_TIME if _STARTUP_TIME > 0 else 0
    return {
        "status": "ok",
        "version": rightsclaims.__version__,
        "uptime_seconds": round(uptime_s, 1),
        "algorithms": [a.value for a in Algorithm],
    }


# ---------------------------------------------------------------------------
# Headers and claims
# ---------------------------------------------------------------------------


@app.post("/headers", tags=["Headers"], summary="Build header from a public key")
async def create_header(req: HeaderRequest):
    try:
        public_key = b64url_decode(req.public_key)
    except ValueError as exc:
        raise MalformedKeyError("public_key is not valid base64url") from exc
    return build_header(public_key, req.curve)


@app.post("/claims", status_code=201, tags=["Claims"], summary="Stamp and identify claims")
async def create_claims_endpoint(req: ClaimsRequest):
    """Return claims with ``iat`` set to now and ``jti`` assigned."""
    if req.typ is ClaimsType.CREATE:
        if req.aud is not None or req.exp is not None or req.nbf is not None:
            raise CredentialError(
                FailureKind.SCHEMA_VIOLATION, "Create claims take no aud, exp or nbf"
            )
        return create_claims(req.iss, req.sub)

    if not req.aud or req.exp is None:
        raise CredentialError(FailureKind.SCHEMA_VIOLATION, "License claims require aud and exp")
    return license_claims(req.iss, req.sub, req.aud, req.exp, nbf=req.nbf)


@app.post("/claims/validate", tags=["Claims"], summary="Validate claims against metadata")
async def validate_claims_endpoint(req: ValidateClaimsRequest):
    return validate_claims(req.claims, req.metadata).to_dict()


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------


def _verify_request(req: VerifyCredentialRequest) -> tuple[dict[str, Any] | None, VerificationResult]:
    if req.token is not None:
        try:
            credential = Credential.decode(req.token)
        except CredentialError as err:
            return None, VerificationResult.from_error(err)
        return credential.claims, credential.verify(req.metadata)

    if req.header is None or req.claims is None or req.signature is None:
        raise HTTPException(
            status_code=422,
            detail="Provide either token, or header + claims + signature.",
        )
    return req.claims, verify_credential(req.claims, req.header, req.metadata, req.signature)


@app.post("/credentials/verify", tags=["Credentials"], summary="Verify a signed credential")
async def verify_credential_endpoint(req: VerifyCredentialRequest, request: Request):
    """Always 200; the verdict and the first failing check are in the body."""
    claims, result = _verify_request(req)
    jti = claims.get("jti") if claims else None
    _audit_logger.info(
        "Credential %s",
        "verified" if result.valid else "rejected",
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "failure": result.failure.value if result.failure else None,
            "jti": jti,
        },
    )
    return {
        "verified": result.valid,
        "failure": result.failure.value if result.failure else None,
        "message": result.message,
        "jti": jti,
    }
