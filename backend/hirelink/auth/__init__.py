# hirelink/auth/__init__.py
"""
Authentication modules for HireLink.

This package contains:
- identity.py: Verified identity attached to a request after the bearer gate passes
- gate.py: Bearer token verification against the external identity service
"""
from hirelink.auth.gate import (
    AuthError,
    AuthGate,
    InvalidCredential,
    InvalidOrExpiredCredential,
    MissingOrMalformedCredential,
    UpstreamUnavailable,
)
from hirelink.auth.identity import VerifiedIdentity

__all__ = [
    "AuthError",
    "AuthGate",
    "InvalidCredential",
    "InvalidOrExpiredCredential",
    "MissingOrMalformedCredential",
    "UpstreamUnavailable",
    "VerifiedIdentity",
]
