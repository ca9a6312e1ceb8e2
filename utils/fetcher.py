import httpx
from typing import Any, Optional
from config import FETCH_TIMEOUT
from utils.errors import NetworkError, HttpStatusError, ParseError
from base_logger import get_logger

logger = get_logger(__name__)


class RemoteFetcher:
    """
    Fetch JSON documents from mirror hosts.

    Redirects are followed and certificate verification is disabled, some mirrors serve mismatched certificates
    for public read-only metadata. A single failed request is final, nothing is retried.
    """

    def __init__(self, timeout: float = FETCH_TIMEOUT, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.timeout = timeout
        self.transport = transport

    async def fetch(self, url: str) -> Any:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True, verify=False,
                                         transport=self.transport) as client:
                response = await client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Request to {url} failed: {e!r}")
            raise NetworkError(url, str(e) or type(e).__name__) from e

        logger.info(f"GET {url} -> {response.status_code}")
        if response.status_code != 200:
            raise HttpStatusError(url, response.status_code)
        try:
            return response.json()
        except (ValueError, RecursionError) as e:
            logger.error(f"Response of {url} is not valid JSON: {e}")
            raise ParseError(url) from e
