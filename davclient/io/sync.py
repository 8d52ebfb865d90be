"""
Blocking WebDAV transport on top of requests.

Sends the method, URL, headers and body of a DAVRequest as they are.
Nothing here looks at the response status or body; requests exceptions
(connection refused, timeouts, TLS failures) reach the caller unchanged.
"""

import logging
from typing import Optional

import requests
from requests.structures import CaseInsensitiveDict

from davclient.protocol.types import DAVRequest, DAVResponse

log = logging.getLogger(__name__)


class SyncIO:
    """
    Transport used by DAVClient unless another one is injected.

    The requests.Response is handed back as ``DAVResponse.raw`` so
    callers can get at cookies, history and the like.

    Example:
        with SyncIO(timeout=10) as io:
            response = io.execute(protocol.mkcol_request("/files/new/"))
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = 30.0,
        verify: bool = True,
    ):
        """
        Args:
            session: requests Session to send through; one is created,
                and later closed, if not given
            timeout: Seconds before requests gives up
            verify: Check the server's TLS certificate
        """
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.timeout = timeout
        self.verify = verify

    def execute(self, request: DAVRequest) -> DAVResponse:
        """Send one request; 4xx and 5xx come back like any other response."""
        log.debug("%s %s", request.method, request.url)
        response = self.session.request(
            method=request.method,
            url=request.url,
            headers=dict(request.headers),
            data=request.body,
            timeout=self.timeout,
            verify=self.verify,
        )

        return DAVResponse(
            status=response.status_code,
            headers=CaseInsensitiveDict(response.headers),
            body=response.content,
            raw=response,
        )

    def close(self) -> None:
        ## a session passed in belongs to the caller
        if self._owns_session and self.session:
            self.session.close()

    def __enter__(self) -> "SyncIO":
        return self

    def __exit__(self, *args) -> None:
        self.close()
