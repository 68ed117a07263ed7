"""
Base HTTP Client

Shared base class for thin clients of the Telegram Bot API.
"""

from typing import Any, Dict, Optional, Type

import httpx

from orderbot.errors import ChannelError, ChannelSendFailure


class BaseClient:
    """Base Bot API client with common error handling."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize base client.

        Args:
            base_url: Bot API base URL including the bot token segment
            timeout: Default request timeout in seconds
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        # Create a single httpx client instance for reuse
        self._client = httpx.Client(timeout=timeout, transport=transport)

    def _call(
        self,
        method: str,
        payload: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
        error_cls: Type[ChannelError] = ChannelSendFailure,
    ) -> Any:
        """
        POST a Bot API method and return its `result` field.

        Args:
            method: Bot API method name (sendMessage, editMessageText, ...)
            payload: JSON body
            timeout: Per-request timeout override
            error_cls: ChannelError subclass raised on failure

        Returns:
            The `result` field of the Bot API response

        Raises:
            error_cls: On network failures, HTTP errors or an `ok: false` body
        """
        url = f"{self.base_url}/{method}"
        request_timeout = timeout if timeout is not None else self.timeout

        try:
            response = self._client.post(url, json=payload or {}, timeout=request_timeout)
        except httpx.RequestError as e:
            raise error_cls(method, f"request failed: {str(e)}") from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.status_code >= 400 or not isinstance(body, dict) or not body.get("ok"):
            description = ""
            if isinstance(body, dict):
                description = str(body.get("description", ""))
            if not description:
                description = response.text[:500] if response.text else ""
            raise error_cls(
                method,
                f"API returned error {response.status_code}: {description}",
                description=description,
            )

        return body.get("result")

    def close(self) -> None:
        self._client.close()

    def __del__(self):
        """Close httpx client on cleanup."""
        if hasattr(self, "_client"):
            try:
                self._client.close()
            except Exception:
                pass
