"""Server-to-server OAuth token acquisition for the Zoom API."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import httpx

from baton.zoom.config import DEFAULT_AUTH_URL
from baton.zoom.errors import TransportError, ZoomAuthError

logger = logging.getLogger(__name__)


@dataclass
class TokenInfo:
    """OAuth token information."""

    access_token: str
    expires_at: float

    def is_valid(self, leeway: int = 30) -> bool:
        """Check if token is still valid."""
        return time.time() < (self.expires_at - leeway)


class ZoomTokenProvider:
    """Fetches and caches account-credentials bearer tokens.

    A token is reused until shortly before it expires; a cached token is only
    returned for the same account and client it was issued for.
    """

    def __init__(
        self,
        auth_url: str = DEFAULT_AUTH_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._auth_url = auth_url
        self._timeout = timeout
        self._transport = transport
        self._token: TokenInfo | None = None
        self._issued_for: tuple[str, str] | None = None

    async def get_token(self, account_id: str, client_id: str, client_secret: str) -> str:
        """Return a bearer token, requesting a new one when needed."""
        key = (account_id, client_id)
        if self._token and self._issued_for == key and self._token.is_valid():
            return self._token.access_token

        logger.debug("Requesting access token for account %s", account_id)

        async with httpx.AsyncClient(
            timeout=self._timeout, transport=self._transport
        ) as client:
            try:
                response = await client.post(
                    self._auth_url,
                    params={"grant_type": "account_credentials", "account_id": account_id},
                    auth=(client_id, client_secret),
                    headers={"Accept": "application/json"},
                )
            except httpx.TransportError as e:
                raise TransportError(f"Token request failed: {e}") from e

        if response.status_code != 200:
            raise ZoomAuthError(
                f"Account credentials authentication failed: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            payload = response.json()
            access_token = payload["access_token"]
        except (ValueError, KeyError) as e:
            raise ZoomAuthError(f"Malformed token response: {response.text}") from e

        self._token = TokenInfo(
            access_token=access_token,
            expires_at=time.time() + float(payload.get("expires_in", 3600)),
        )
        self._issued_for = key
        logger.info("Authenticated Zoom account: %s", account_id)
        return access_token
