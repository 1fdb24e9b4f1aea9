# hirelink/dependencies/auth.py
from __future__ import annotations

import logging

from fastapi import Depends, HTTPException, Request, status

from hirelink.auth.gate import AuthError, AuthGate, UpstreamUnavailable
from hirelink.auth.identity import VerifiedIdentity

logger = logging.getLogger(__name__)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_auth_gate(request: Request) -> AuthGate:
    return request.app.state.auth_gate


async def require_identity(
    request: Request,
    gate: AuthGate = Depends(get_auth_gate),
) -> VerifiedIdentity:
    """
    Validates:
      - Authorization: Bearer <token>
      - token accepted by the identity service
    Returns:
      - VerifiedIdentity, also stored on request.state.identity
    """
    try:
        identity = await gate.authorize(request.headers.get("Authorization"))
    except UpstreamUnavailable as exc:
        logger.error("Bearer verification unavailable for %s %s", request.method, request.url.path)
        raise _unauthorized(exc.message)
    except AuthError as exc:
        logger.info("Rejected bearer credential (%s) for %s", type(exc).__name__, request.url.path)
        raise _unauthorized(exc.message)

    logger.debug("Verified bearer identity %s", identity.to_debug_dict())
    request.state.identity = identity
    return identity
