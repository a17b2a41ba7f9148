import asyncio
import logging
import ssl
from typing import Any, Dict

import aiohttp
import certifi

from src.weather_lookup.exceptions import UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class AsyncJSONClient:
    """Base class for the async provider clients.

    Performs a single HTTPS GET per call and returns the decoded JSON object.
    There is no retry: these calls back interactive requests, so a failure is
    reported immediately as `UpstreamError` with the provider's status and
    body attached for logging.

    Attributes:
        provider (str): Short provider name used in errors and logs.
        timeout_seconds (float): Total timeout for one request.
    """

    provider: str = "upstream"

    def __init__(self, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS):
        self.timeout_seconds = timeout_seconds

    async def get_json(self, url: str) -> Dict[str, Any]:
        """Fetch `url` and return the parsed JSON object.

        Args:
            url (str): Fully formed request URL.

        Returns:
            Dict[str, Any]: Parsed JSON body.

        Raises:
            UpstreamError: On non-2xx responses, network failures, timeouts
                or a body that is not a JSON object.
        """
        ssl_context = ssl.create_default_context(cafile=certifi.where())
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)

        try:
            async with aiohttp.ClientSession(
                connector=aiohttp.TCPConnector(ssl=ssl_context),
                timeout=timeout,
            ) as session:
                async with session.get(url) as response:
                    if not 200 <= response.status < 300:
                        body = await response.text()
                        logger.error(
                            f"❌ {self.provider} returned {response.status}: "
                            f"{body[:500]}"
                        )
                        raise UpstreamError(
                            self.provider, status=response.status, body=body
                        )
                    data = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"❌ {self.provider} request failed: {e!r}")
            raise UpstreamError(self.provider, body=repr(e)) from e

        if not isinstance(data, dict):
            raise UpstreamError(
                self.provider,
                status=200,
                body=f"Expected JSON object, got {type(data).__name__}",
            )

        return data
