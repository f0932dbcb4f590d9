"""HTTP forwarding from the dispatcher to worker processes."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from user_cluster.domain.errors import UpstreamProxyError

_HOP_BY_HOP = frozenset(
    {
        b"connection",
        b"keep-alive",
        b"proxy-authenticate",
        b"proxy-authorization",
        b"te",
        b"trailer",
        b"transfer-encoding",
        b"upgrade",
    }
)


def end_to_end_headers(
    headers: list[tuple[bytes, bytes]],
) -> list[tuple[bytes, bytes]]:
    """Drop hop-by-hop headers, keeping the rest in order."""
    return [(name, value) for name, value in headers if name.lower() not in _HOP_BY_HOP]


class WorkerProxy(Protocol):
    """Interface for relaying a request to a worker."""

    async def send(
        self,
        port: int,
        method: str,
        target: bytes,
        headers: list[tuple[bytes, bytes]],
        body: bytes,
    ) -> httpx.Response:
        """Forward a request and return the streaming upstream response."""


@dataclass
class HttpxWorkerProxy(WorkerProxy):
    """Worker proxy implemented with httpx."""

    host: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, host: str) -> "HttpxWorkerProxy":
        """Create a proxy with a managed httpx session and no timeouts."""
        return cls(host=host, http_client=httpx.AsyncClient(timeout=None))

    async def send(
        self,
        port: int,
        method: str,
        target: bytes,
        headers: list[tuple[bytes, bytes]],
        body: bytes,
    ) -> httpx.Response:
        """Forward a request as-is and return the unread upstream response.

        ``target`` is the raw path plus query string. The caller owns the
        returned response and must close it once the body has been relayed.
        """
        url = httpx.URL(f"http://{self.host}:{port}").copy_with(raw_path=target)
        request = self.http_client.build_request(
            method, url, headers=end_to_end_headers(headers), content=body or None
        )
        try:
            return await self.http_client.send(request, stream=True)
        except httpx.HTTPError as exc:
            raise UpstreamProxyError(
                f"{type(exc).__name__} forwarding to port {port}: {exc}"
            ) from exc

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
