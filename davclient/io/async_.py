"""
Asynchronous WebDAV transport on top of aiohttp.

The session is created lazily, on the first request, so an AsyncIO
may be constructed outside of a running event loop.
"""

import logging
from typing import Optional

import aiohttp
from requests.structures import CaseInsensitiveDict

from davclient.protocol.types import DAVRequest, DAVResponse

log = logging.getLogger(__name__)


class AsyncIO:
    """
    Transport used by AsyncDAVClient unless another one is injected.

    The body is read before the aiohttp response is released; the
    released ClientResponse still goes out as ``DAVResponse.raw`` for
    its status line, headers and URL.  aiohttp.ClientError and
    asyncio.TimeoutError propagate.

    Example:
        async with AsyncIO(timeout=10) as io:
            response = await io.execute(protocol.mkcol_request("/files/new/"))
    """

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: float = 30.0,
        verify_ssl: bool = True,
    ):
        """
        Args:
            session: aiohttp ClientSession to send through; one is
                created on first use, and later closed, if not given
            timeout: Total seconds allowed per request
            verify_ssl: Check the server's TLS certificate
        """
        self._session = session
        self._owns_session = session is None
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.verify_ssl = verify_ssl

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            connector = aiohttp.TCPConnector(ssl=self.verify_ssl)
            self._session = aiohttp.ClientSession(
                timeout=self.timeout,
                connector=connector,
            )
        return self._session

    async def execute(self, request: DAVRequest) -> DAVResponse:
        """Send one request; 4xx and 5xx come back like any other response."""
        session = await self._get_session()
        log.debug("%s %s", request.method, request.url)

        async with session.request(
            method=request.method,
            url=request.url,
            headers=dict(request.headers),
            data=request.body,
        ) as response:
            body = await response.read()
            return DAVResponse(
                status=response.status,
                headers=CaseInsensitiveDict(response.headers),
                body=body,
                raw=response,
            )

    async def close(self) -> None:
        ## a session passed in belongs to the caller
        if self._session and self._owns_session:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "AsyncIO":
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()
