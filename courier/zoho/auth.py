"""OAuth access-token provider for the Zoho APIs.

Zoho issues short-lived access tokens (one hour by default) in exchange for
a long-lived refresh token. :class:`ZohoTokenProvider` records when each
token was issued and how long it is valid for, re-exchanges shortly before
expiry, and can be told to discard a token that Zoho has rejected.

Usage
-----
>>> provider = ZohoTokenProvider(ZohoConfig.from_env())
>>> token = await provider.get_access_token()  # doctest: +SKIP
>>> provider.invalidate()  # next call re-exchanges

"""

from __future__ import annotations

import asyncio
import dataclasses as dc
import datetime as dt
import typing as typ

import httpx
import msgspec

from courier.common.time import utcnow
from courier.logging import get_logger, log_info

from .errors import ZohoAuthError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config import ZohoConfig

logger = get_logger(__name__)

_HTTP_ERROR_STATUS_THRESHOLD = 400
_DEFAULT_EXPIRES_IN_S = 3600
_DEFAULT_REFRESH_MARGIN = dt.timedelta(seconds=60)


class _TokenResponse(msgspec.Struct, kw_only=True):
    access_token: str | None = None
    expires_in: int | None = None
    error: str | None = None


@dc.dataclass(frozen=True, slots=True)
class AccessToken:
    """A bearer token together with its validity window."""

    value: str
    issued_at: dt.datetime
    expires_at: dt.datetime

    def is_fresh(self, now: dt.datetime, margin: dt.timedelta) -> bool:
        """Return whether the token stays valid for at least *margin*."""
        return now + margin < self.expires_at


class AccessTokenSource(typ.Protocol):
    """Interface the Zoho client needs from a credential holder."""

    async def get_access_token(self) -> str:
        """Return a bearer token believed to be valid."""
        ...

    def invalidate(self) -> None:
        """Discard the cached token so the next request re-exchanges."""
        ...


class ZohoTokenProvider:
    """Exchange and cache Zoho access tokens with expiry tracking.

    Parameters
    ----------
    config
        Zoho configuration carrying the OAuth client and refresh token.
    http_client
        Optional ``httpx.AsyncClient`` for testing; otherwise owned.
    clock
        Callable returning the current aware UTC time.
    refresh_margin
        How long before expiry a token is treated as stale.

    """

    def __init__(
        self,
        config: ZohoConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
        clock: cabc.Callable[[], dt.datetime] = utcnow,
        refresh_margin: dt.timedelta = _DEFAULT_REFRESH_MARGIN,
    ) -> None:
        """Initialise the provider without contacting Zoho."""
        self._config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=config.timeout_s)
        self._clock = clock
        self._refresh_margin = refresh_margin
        self._token: AccessToken | None = None
        self._lock = asyncio.Lock()

    @property
    def current_token(self) -> AccessToken | None:
        """Return the cached token, if any, without refreshing it."""
        return self._token

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    def invalidate(self) -> None:
        """Discard the cached token."""
        self._token = None

    async def get_access_token(self) -> str:
        """Return a valid access token, exchanging the refresh token if needed.

        Raises
        ------
        ZohoAuthError
            If Zoho rejects the exchange or the request cannot be sent.

        """
        token = self._token
        if token is not None and token.is_fresh(self._clock(), self._refresh_margin):
            return token.value

        async with self._lock:
            # Another coroutine may have refreshed while this one waited.
            token = self._token
            if token is not None and token.is_fresh(
                self._clock(), self._refresh_margin
            ):
                return token.value
            self._token = await self._exchange()
            return self._token.value

    async def _exchange(self) -> AccessToken:
        params = {
            "refresh_token": self._config.refresh_token,
            "client_id": self._config.client_id,
            "client_secret": self._config.client_secret,
            "grant_type": "refresh_token",
        }
        try:
            response = await self._client.post(
                f"{self._config.accounts_url}/oauth/v2/token",
                params=params,
            )
        except httpx.RequestError as exc:
            raise ZohoAuthError.transport(str(exc)) from exc

        if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            raise ZohoAuthError.http_error(response.status_code, response.text)

        try:
            parsed = msgspec.json.decode(response.content, type=_TokenResponse)
        except msgspec.DecodeError as exc:
            raise ZohoAuthError.missing_token(response.text) from exc
        if not parsed.access_token:
            raise ZohoAuthError.missing_token(parsed.error or response.text)

        issued_at = self._clock()
        expires_in = parsed.expires_in or _DEFAULT_EXPIRES_IN_S
        log_info(logger, "Obtained Zoho access token valid for %ds", expires_in)
        return AccessToken(
            value=parsed.access_token,
            issued_at=issued_at,
            expires_at=issued_at + dt.timedelta(seconds=expires_in),
        )
