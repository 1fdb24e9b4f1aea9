# hirelink/auth/gate.py
"""
Bearer token gate backed by an external identity service.

Every protected request is re-verified from scratch:
- ``Authorization: Bearer <token>`` is required (no outbound call otherwise)
- The token is presented to ``GET {IDENTITY_SERVICE_URL}/auth/v1/user``
  together with the service API key
- A 200 response body becomes the request's VerifiedIdentity

No retries and no caching of verification results.
"""
from __future__ import annotations

import logging

import httpx

from hirelink.auth.identity import VerifiedIdentity
from hirelink.core.config import settings

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class AuthError(Exception):
    """Base exception for bearer verification failures. Always a 401."""

    message = "Unauthorized"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        if message:
            self.message = message


class MissingOrMalformedCredential(AuthError):
    """Authorization header absent or not a bearer credential."""

    message = "Token missing or invalid"


class InvalidCredential(AuthError):
    """The identity service rejected the token (or did not answer in time)."""

    message = "Invalid token"


class InvalidOrExpiredCredential(AuthError):
    """The verification call itself failed."""

    message = "Invalid or expired token"


class UpstreamUnavailable(InvalidOrExpiredCredential):
    """The identity service could not be reached or returned garbage."""


# ---------------------------------------------------------------------------
# Gate
# ---------------------------------------------------------------------------


def extract_bearer_token(raw_header_value: str | None) -> str:
    if not raw_header_value or not raw_header_value.startswith(BEARER_PREFIX):
        raise MissingOrMalformedCredential()

    token = raw_header_value[len(BEARER_PREFIX):].strip()
    if not token:
        raise MissingOrMalformedCredential()
    # Header values are forwarded as-is; only printable ASCII can be re-sent.
    if not (token.isascii() and token.isprintable()):
        raise MissingOrMalformedCredential()
    return token


class AuthGate:
    """Verifies bearer tokens with the identity service over a shared async client."""

    def __init__(self, client: httpx.AsyncClient, *, user_url: str, api_key: str) -> None:
        self._client = client
        self.user_url = user_url
        self.api_key = api_key

    @classmethod
    def from_settings(cls) -> AuthGate:
        client = httpx.AsyncClient(timeout=settings.IDENTITY_SERVICE_TIMEOUT_SECONDS)
        return cls(
            client,
            user_url=settings.identity_user_url,
            api_key=settings.IDENTITY_SERVICE_API_KEY,
        )

    async def authorize(self, raw_header_value: str | None) -> VerifiedIdentity:
        """
        Verify the Authorization header value.

        Raises:
            MissingOrMalformedCredential: header missing or not ``Bearer <token>``
            InvalidCredential: identity service returned non-200, or timed out
            UpstreamUnavailable: transport failure or unreadable response body
        """
        token = extract_bearer_token(raw_header_value)

        if not self.user_url:
            logger.error("Identity service URL not configured; rejecting protected request")
            raise UpstreamUnavailable()

        try:
            response = await self._client.get(
                self.user_url,
                headers={
                    "Authorization": f"{BEARER_PREFIX}{token}",
                    "apikey": self.api_key,
                },
            )
        except httpx.TimeoutException as exc:
            logger.warning("Identity service timed out after %ss: %s", self._timeout_seconds(), exc)
            raise InvalidCredential() from exc
        except httpx.HTTPError as exc:
            logger.error("Identity service unreachable: %s", exc)
            raise UpstreamUnavailable() from exc
        except (httpx.InvalidURL, UnicodeError) as exc:
            logger.error("Identity service request could not be built: %s", type(exc).__name__)
            raise UpstreamUnavailable() from exc

        if response.status_code != 200:
            logger.info("Identity service rejected token with status=%s", response.status_code)
            raise InvalidCredential()

        try:
            payload = response.json()
        except ValueError as exc:
            logger.error("Identity service returned a non-JSON body (status=%s)", response.status_code)
            raise UpstreamUnavailable() from exc

        return VerifiedIdentity.from_provider(payload)

    def _timeout_seconds(self) -> float | None:
        return self._client.timeout.read

    async def aclose(self) -> None:
        await self._client.aclose()
