"""Breach check endpoints.

Public endpoints accepting either a raw password or a pre-computed hash.
Both run the same range lookup and share one response shape.
"""

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import JSONResponse

from api.models import CheckResponse, HashCheckRequest, PasswordCheckRequest
from breach_check import LookupResult, lookup_digest, lookup_password
from core.siem import log_siem_event


router = APIRouter(prefix="/api/check", tags=["Breach Check"])

# Everything except POST; StaticFiles mounted at "/" would otherwise answer these
_OTHER_METHODS = ["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _get_client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def _build_response(request: Request, result: LookupResult, event_type: str) -> JSONResponse:
    """Log the lookup and serialize it, omitting empty count and error."""
    if result.ok:
        outcome = "FOUND" if result.found else "NOT_FOUND"
    else:
        outcome = "ERROR"

    log_siem_event(
        event_type,
        outcome,
        source_ip=_get_client_ip(request),
        details={"prefix": result.prefix}
    )

    body = CheckResponse(
        prefix=result.prefix,
        found=result.found,
        count=result.count or None,
        error=result.error,
    )
    status_code = status.HTTP_200_OK if result.ok else request.app.state.upstream_error_status
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.post("/password", response_model=CheckResponse, response_model_exclude_none=True)
def check_password(payload: PasswordCheckRequest, request: Request):
    """Hash a password locally and check it against known breaches."""
    result = lookup_password(payload.password, base_url=request.app.state.range_url)
    return _build_response(request, result, "password_lookup")


@router.post("/hash", response_model=CheckResponse, response_model_exclude_none=True)
def check_hash(payload: HashCheckRequest, request: Request):
    """Check a pre-computed SHA-1 hash against known breaches."""
    result = lookup_digest(payload.hash, base_url=request.app.state.range_url)
    return _build_response(request, result, "hash_lookup")


@router.api_route("/password", methods=_OTHER_METHODS, include_in_schema=False)
@router.api_route("/hash", methods=_OTHER_METHODS, include_in_schema=False)
def method_not_allowed():
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Method not allowed",
        headers={"Allow": "POST"},
    )
