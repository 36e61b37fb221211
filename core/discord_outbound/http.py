# core/discord_outbound/http.py
"""Authenticated Discord REST client."""

import logging
from typing import Any
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)

DISCORD_API_URL = "https://discord.com/api/v10"
USER_AGENT = "DiscordBot (https://github.com/SkyKings-Guild/GameNightManager, 1.0)"


class DiscordHTTPError(Exception):
    """
    Raised when a Discord API request fails.

    status is None for transport failures (the request never got a response).
    body is the parsed JSON error object when Discord sent one, else raw text.
    """

    def __init__(self, status: int | None, body: Any, message: str):
        super().__init__(message)
        self.status = status
        self.body = body

    @property
    def code(self) -> int | None:
        """Discord's numeric JSON error code (e.g. 40032), if present."""
        if isinstance(self.body, dict):
            return self.body.get("code")
        return None


def _parse_body(response: httpx.Response) -> Any:
    content_type = response.headers.get("content-type", "")
    if "application/json" in content_type:
        return response.json()
    return response.text


class DiscordRestClient:
    """
    Thin wrapper around httpx that speaks to the Discord REST API as the bot.

    Every call goes through request(), which adds the bot token and user agent
    and turns non-2xx responses into DiscordHTTPError.
    """

    def __init__(
        self,
        token: str,
        base_url: str = DISCORD_API_URL,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ):
        self._http = httpx.AsyncClient(
            base_url=base_url,
            headers={
                "Authorization": f"Bot {token}",
                "User-Agent": USER_AGENT,
            },
            transport=transport,
            timeout=timeout,
        )

    async def close(self) -> None:
        """Close the shared HTTP client. Call on app shutdown."""
        await self._http.aclose()

    async def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        reason: str | None = None,
    ) -> Any:
        """
        Send a request and return the parsed response body.

        Args:
            method: HTTP method
            path: Path relative to the API base, e.g. "channels/123"
            json: Optional JSON body
            reason: Optional audit log reason (shown in the guild audit log)

        Raises:
            DiscordHTTPError: On transport failure or non-2xx status
        """
        headers = {}
        if reason:
            # Header values must be ASCII; Discord decodes URL-encoded reasons
            headers["X-Audit-Log-Reason"] = quote(reason, safe=" ")

        logger.debug(f"Discord {method} {path}")
        try:
            response = await self._http.request(
                method, path, json=json, headers=headers
            )
        except httpx.HTTPError as e:
            logger.error(f"Error fetching {method} {path}: {e}")
            raise DiscordHTTPError(None, None, f"Error fetching: {e}") from e

        logger.debug(f"Discord {method} {path} -> {response.status_code}")
        body = _parse_body(response)
        if not response.is_success:
            raise DiscordHTTPError(
                response.status_code,
                body,
                f"HTTP error! status: {response.status_code}: {body}",
            )
        return body
