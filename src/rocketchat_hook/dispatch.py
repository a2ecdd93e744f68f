from __future__ import annotations

import httpx
import typer

from .config import DEFAULT_TIMEOUT_S
from .logging import get_logger
from .payload import Payload, encode_payload

logger = get_logger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


class WebhookDispatcher:
    """Posts payloads to the incoming webhook, one attempt each."""

    def __init__(
        self,
        *,
        debug: bool = False,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        client: httpx.Client | None = None,
    ) -> None:
        self._debug = debug
        self._client = client
        self._timeout_s = timeout_s
        self._owns_client = client is None

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=self._timeout_s)
        return self._client

    def close(self) -> None:
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> WebhookDispatcher:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def send(self, url: str, payload: Payload) -> bool:
        """Deliver ``payload``; ``False`` only on a transport failure."""
        body = encode_payload(payload)
        if self._debug:
            typer.echo(f"POST {url}")
            typer.echo(f"payload={body.decode()}")
            return True

        logger.debug("rocketchat.request", url=url, payload=body.decode())
        try:
            resp = self._get_client().post(url, content=body, headers=JSON_HEADERS)
        except httpx.HTTPError as e:
            logger.error(
                "rocketchat.network_error",
                url=url,
                error=str(e),
                error_type=e.__class__.__name__,
            )
            return False

        if resp.is_error:
            logger.warning(
                "rocketchat.http_error",
                url=url,
                status=resp.status_code,
            )
        else:
            logger.debug("rocketchat.response", url=url, status=resp.status_code)
        return True
