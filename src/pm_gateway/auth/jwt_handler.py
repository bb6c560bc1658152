"""Bearer credential → ledger party resolution.

Two modes, selected by AUTH_MODE:

  oauth2         The credential is a JWT. It is verified against the issuer's
                 JWKS (JWT_JWKS_URL, cached for JWT_JWKS_CACHE_SECONDS) or,
                 without one, against JWT_SECRET. Party comes from the
                 ``party_id`` claim, falling back to ``sub`` (Keycloak maps
                 the ledger user id to ``sub``).
  shared-secret  The credential must equal SHARED_SECRET; every caller acts as
                 APP_PROVIDER_PARTY. Local development only.
"""

import asyncio
import hmac
import logging
import time
from datetime import UTC, datetime, timedelta
from typing import Any

import httpx
from jose import JWTError, jwt

from config.settings import settings
from src.pm_common.enums import AuthMode
from src.pm_common.errors import AuthenticationError

logger = logging.getLogger(__name__)

_ACCESS_EXPIRE = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
_JWKS_FETCH_TIMEOUT_SECONDS = 5.0


class JwksCache:
    """Issuer key set, re-fetched once ``ttl_seconds`` have passed."""

    def __init__(
        self,
        url: str,
        ttl_seconds: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self._ttl = ttl_seconds
        self._transport = transport
        self._jwks: dict[str, Any] | None = None
        self._fetched_at = 0.0
        self._lock = asyncio.Lock()

    async def get(self) -> dict[str, Any]:
        """Return the cached key set, fetching it when missing or stale.

        Raises:
            AuthenticationError: the issuer could not be reached or answered
                with something other than a JSON key set.
        """
        async with self._lock:
            if self._jwks is not None and time.monotonic() - self._fetched_at < self._ttl:
                return self._jwks
            try:
                async with httpx.AsyncClient(
                    transport=self._transport, timeout=_JWKS_FETCH_TIMEOUT_SECONDS
                ) as client:
                    resp = await client.get(self.url)
                    resp.raise_for_status()
                    jwks = resp.json()
            except (httpx.HTTPError, ValueError) as exc:
                logger.warning("JWKS fetch failed: url=%s %s", self.url, exc)
                raise AuthenticationError("Signing keys unavailable") from None
            if not isinstance(jwks, dict) or not isinstance(jwks.get("keys"), list):
                logger.warning("JWKS response has no key list: url=%s", self.url)
                raise AuthenticationError("Signing keys unavailable")
            self._jwks = jwks
            self._fetched_at = time.monotonic()
            return jwks


_jwks_cache: JwksCache | None = None


def _get_jwks_cache(url: str) -> JwksCache:
    global _jwks_cache
    if _jwks_cache is None or _jwks_cache.url != url:
        _jwks_cache = JwksCache(url, settings.JWT_JWKS_CACHE_SECONDS)
    return _jwks_cache


def _select_jwk(jwks: dict[str, Any], token: str) -> dict[str, Any]:
    """Key matching the token's ``kid``; the whole set when it names none."""
    try:
        kid = jwt.get_unverified_header(token).get("kid")
    except JWTError:
        raise AuthenticationError("Invalid or expired token") from None
    if kid is None:
        return jwks
    for key in jwks["keys"]:
        if key.get("kid") == kid:
            return key
    raise AuthenticationError("Unknown signing key")


async def get_verification_key(token: str) -> str | dict[str, Any]:
    """Key material ``token`` must verify against in oauth2 mode."""
    if not settings.JWT_JWKS_URL:
        return settings.JWT_SECRET or ""
    jwks = await _get_jwks_cache(settings.JWT_JWKS_URL).get()
    return _select_jwk(jwks, token)


def create_party_token(party: str, subject: str | None = None) -> str:
    """Issue an oauth2-mode token for ``party`` (local tooling and tests)."""
    if not settings.JWT_SECRET:
        raise ValueError("JWT_SECRET is required to sign local tokens")
    now = datetime.now(UTC)
    payload = {
        "sub": subject or party,
        "party_id": party,
        "iat": now,
        "exp": now + _ACCESS_EXPIRE,
    }
    if settings.JWT_AUDIENCE:
        payload["aud"] = settings.JWT_AUDIENCE
    return str(jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM))


def bearer_for_party(party: str) -> str:
    """Bearer credential the running server accepts for ``party``.

    In shared-secret mode that is the secret itself; the server then acts as
    APP_PROVIDER_PARTY whatever ``party`` says.
    """
    if settings.AUTH_MODE == AuthMode.SHARED_SECRET.value:
        return str(settings.SHARED_SECRET)
    return create_party_token(party)


def decode_token(token: str, key: str | dict[str, Any] | None = None) -> dict[str, Any]:
    """Decode and validate a JWT against ``key`` (default: JWT_SECRET).

    Raises:
        AuthenticationError: bad signature, expired, or wrong audience.
    """
    try:
        return jwt.decode(
            token,
            key if key is not None else settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],  # Explicit list prevents algorithm confusion
            audience=settings.JWT_AUDIENCE,
            options={"verify_aud": settings.JWT_AUDIENCE is not None},
        )
    except JWTError:
        raise AuthenticationError("Invalid or expired token") from None


def resolve_party(token: str, key: str | dict[str, Any] | None = None) -> str:
    """Return the ledger party the credential acts as.

    Raises:
        AuthenticationError: credential is invalid or carries no party.
    """
    if settings.AUTH_MODE == AuthMode.SHARED_SECRET.value:
        secret = settings.SHARED_SECRET or ""
        if not secret or not hmac.compare_digest(token.encode(), secret.encode()):
            raise AuthenticationError("Invalid shared secret")
        return str(settings.APP_PROVIDER_PARTY)

    payload = decode_token(token, key)
    party = payload.get("party_id") or payload.get("sub")
    if not party:
        raise AuthenticationError("Token carries no party")
    return str(party)
