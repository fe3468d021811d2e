"""HTTP document fetcher with private-network protection.

All document downloads (PDF search and PDF proxy) go through a single
DocumentFetcher instance. The Fetcher receives an httpx.AsyncClient via
constructor injection; the lifespan owns the client lifecycle.
"""

from __future__ import annotations

import ipaddress
import socket
from typing import TYPE_CHECKING
from urllib.parse import urljoin, urlparse

import httpx
import structlog

from milestoneproxy import __version__
from milestoneproxy.errors import ErrorCode, MilestoneProxyError
from milestoneproxy.models.documents import FetchedDocument

if TYPE_CHECKING:
    from milestoneproxy.config import DocumentSettings

log = structlog.get_logger()

PRIVATE_NETWORKS: list[ipaddress.IPv4Network | ipaddress.IPv6Network] = [
    ipaddress.ip_network("0.0.0.0/8"),
    ipaddress.ip_network("10.0.0.0/8"),
    ipaddress.ip_network("172.16.0.0/12"),
    ipaddress.ip_network("192.168.0.0/16"),
    ipaddress.ip_network("127.0.0.0/8"),
    ipaddress.ip_network("169.254.0.0/16"),
    ipaddress.ip_network("::/128"),
    ipaddress.ip_network("::1/128"),
    ipaddress.ip_network("fe80::/10"),
    ipaddress.ip_network("fc00::/7"),
]


def build_http_client(timeout_seconds: float = 30.0) -> httpx.AsyncClient:
    """Create a shared httpx client. Called once per upstream at startup."""
    return httpx.AsyncClient(
        follow_redirects=False,
        timeout=httpx.Timeout(timeout_seconds),
        headers={"User-Agent": f"milestoneproxy/{__version__}"},
        limits=httpx.Limits(
            max_connections=10,
            max_keepalive_connections=5,
        ),
    )


def _host_address(hostname: str) -> ipaddress.IPv4Address | ipaddress.IPv6Address | None:
    """Parse a literal IP host, including shorthand IPv4 such as ``127.1`` or ``2130706433``."""
    try:
        addr = ipaddress.ip_address(hostname)
    except ValueError:
        # The resolver accepts the inet_aton forms that ip_address rejects.
        try:
            return ipaddress.IPv4Address(socket.inet_aton(hostname))
        except (OSError, ValueError):
            return None
    if isinstance(addr, ipaddress.IPv6Address) and addr.ipv4_mapped is not None:
        return addr.ipv4_mapped
    return addr


def is_private_url(url: str) -> bool:
    """Return True if the URL host is localhost or a literal IP in a private range."""
    hostname = (urlparse(url).hostname or "").rstrip(".")
    if hostname == "localhost" or hostname.endswith(".localhost"):
        return True
    addr = _host_address(hostname)
    if addr is None:
        return False  # hostname is a domain name, not an IP
    return any(addr in net for net in PRIVATE_NETWORKS)


def _unavailable(message: str, *, recoverable: bool = True) -> MilestoneProxyError:
    return MilestoneProxyError(
        code=ErrorCode.UPSTREAM_UNAVAILABLE,
        message=message,
        suggestion="The document host may be temporarily unavailable.",
        recoverable=recoverable,
    )


class DocumentFetcher:
    """Fetches document bytes, following redirects hop by hop."""

    def __init__(self, client: httpx.AsyncClient, settings: DocumentSettings) -> None:
        self._client = client
        self._max_redirects = settings.max_redirects
        self._block_private_ips = settings.block_private_ips

    async def fetch(self, url: str) -> FetchedDocument:
        """Fetch a URL and return its body and content type.

        Raises MilestoneProxyError(UPSTREAM_UNAVAILABLE) on blocked hosts,
        network errors, redirect loops, and non-2xx responses.
        """
        current_url = url

        try:
            for hop in range(self._max_redirects + 1):
                if self._block_private_ips and is_private_url(current_url):
                    log.warning("fetch_blocked", url=current_url, reason="private_network")
                    raise _unavailable(
                        f"Refusing to fetch private address: {current_url}",
                        recoverable=False,
                    )

                response = await self._client.get(current_url)

                if response.is_redirect and "location" in response.headers:
                    if hop == self._max_redirects:
                        raise _unavailable(f"Too many redirects fetching {url}", recoverable=False)
                    current_url = urljoin(current_url, response.headers["location"])
                    continue

                if not response.is_success:
                    log.warning("fetch_failed", url=url, status_code=response.status_code)
                    raise _unavailable(f"HTTP {response.status_code} fetching {url}")

                log.info(
                    "fetch_complete",
                    url=url,
                    status_code=response.status_code,
                    content_length=len(response.content),
                )
                return FetchedDocument(
                    url=current_url,
                    content=response.content,
                    content_type=response.headers.get("content-type"),
                )

        except MilestoneProxyError:
            raise
        except httpx.HTTPError as exc:
            log.warning("fetch_network_error", url=url, error=str(exc))
            raise _unavailable(f"Network error fetching {url}: {exc}") from exc

        # Unreachable but satisfies the type checker
        raise _unavailable("Redirect loop", recoverable=False)
