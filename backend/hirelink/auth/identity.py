# hirelink/auth/identity.py
"""
Verified identity model.

Built per request from the identity service's user payload and stored on
``request.state.identity``. It is never persisted, cached, or reused across
requests.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class VerifiedIdentity:
    """
    Identity returned by a successful bearer verification.

    Attributes:
        subject: The provider's user id (``id`` in the payload), if present.
        email: User's email if the payload carries one.
        raw: The full provider payload, passed through unvalidated.
    """

    subject: str | None = None
    email: str | None = None
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_provider(cls, payload: Any) -> VerifiedIdentity:
        """Map the provider body directly; no shape validation is performed."""
        raw = payload if isinstance(payload, dict) else {"data": payload}
        subject = raw.get("id")
        email = raw.get("email")
        return cls(
            subject=str(subject) if subject is not None else None,
            email=email.strip().lower() if isinstance(email, str) and email else None,
            raw=raw,
        )

    def to_debug_dict(self) -> dict[str, Any]:
        """Safe subset for logs; excludes the raw payload."""
        return {"subject": self.subject, "email": self.email}
