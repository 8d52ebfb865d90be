#!/usr/bin/env python
"""
Async WebDAV client.

Every operation is a coroutine: calling it hands back a pending
awaitable right away, and awaiting it gives exactly one RequestOutcome
or raises exactly one exception.  HTTP error statuses are delivered as
outcomes, only transport failures raise.

Requests issued concurrently (i.e. through ``asyncio.gather``) are
independent of each other; there is no queueing, retrying or caching.
"""
import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from davclient.io import AsyncIO, AsyncIOProtocol
from davclient.lib import error
from davclient.lib.debug import dump_communication
from davclient.lib.namespace import NamespaceRegistry
from davclient.lib.url import ParsedURL
from davclient.protocol import DAVMethod, DAVProtocol, DAVRequest, RequestOutcome
from davclient.protocol.operations import Depth

log = logging.getLogger("davclient")


class AsyncDAVClient:
    """
    Async WebDAV client.

    Example:
        async with AsyncDAVClient("https://dav.example.com/", "user", "secret") as client:
            client.xml_namespaces["http://owncloud.org/ns"] = "oc"
            result = await client.propfind("/files/", ["{DAV:}getetag"], depth=1)
            for resource in result.body:
                print(resource.href, resource.propstat[0].properties)
    """

    def __init__(
        self,
        url: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        namespaces: Optional[Union[NamespaceRegistry, Dict[str, str]]] = None,
        io: Optional[AsyncIOProtocol] = None,
        timeout: float = 30.0,
        ssl_verify_cert: bool = True,
        huge_tree: bool = False,
    ) -> None:
        """
        Args:
            url: Base URL; paths are resolved against its root
            username: Username for Basic authentication
            password: Password for Basic authentication
            namespaces: Namespace URI -> prefix mapping, on top of DAV:
            io: Transport to use instead of an aiohttp based one
            timeout: Request timeout in seconds
            ssl_verify_cert: Verify SSL certificates
            huge_tree: Allow parsing very large XML documents
        """
        log.debug("url: " + str(url))
        self.protocol = DAVProtocol(
            base_url=url,
            username=username,
            password=password,
            namespaces=namespaces,
            huge_tree=huge_tree,
        )
        self._owns_io = io is None
        self.io = io or AsyncIO(timeout=timeout, verify_ssl=ssl_verify_cert)

    async def __aenter__(self) -> "AsyncDAVClient":
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the transport, if this client created it."""
        if self._owns_io:
            await self.io.close()

    @property
    def url(self) -> str:
        return self.protocol.config.base_url

    @property
    def xml_namespaces(self) -> NamespaceRegistry:
        """The namespace URI -> prefix registry, open for additions."""
        return self.protocol.xml_namespaces

    def resolve_url(self, path: str) -> str:
        return self.protocol.resolve_url(path)

    def parse_url(self, url: str) -> ParsedURL:
        return self.protocol.parse_url(url)

    async def request(
        self,
        method: Union[DAVMethod, str],
        path: str,
        headers: Optional[Mapping[str, str]] = None,
        body: Union[str, bytes, None] = None,
    ) -> RequestOutcome:
        """
        Send any request.

        Args:
            method: HTTP verb
            path: Resource path or URL
            headers: Extra headers, these win over the defaults
            body: Request body

        Returns:
            RequestOutcome; the body is parsed if it is an XML multistatus
        """
        return await self._execute(self.protocol.build_request(method, path, headers, body))

    async def propfind(
        self,
        path: str,
        props: Optional[Iterable[str]] = None,
        depth: Depth = None,
        headers: Optional[Mapping[str, str]] = None,
        allprop: bool = False,
    ) -> RequestOutcome:
        """
        Fetch properties.

        Args:
            path: Resource path or URL
            props: Property keys, like "{DAV:}getetag"
            depth: 0 (default), 1 or "infinity"
            headers: Extra headers
            allprop: Ask for all properties instead

        Returns:
            RequestOutcome.  With depth 0 the body is the single
            ResourceResult rather than a list.
        """
        request = self.protocol.propfind_request(path, props, depth, headers, allprop=allprop)
        outcome = await self._execute(request)
        return self.protocol.shape_propfind(outcome, depth)

    async def proppatch(
        self,
        path: str,
        props: Optional[Dict[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        remove: Optional[Iterable[str]] = None,
    ) -> RequestOutcome:
        """Set (and optionally remove) properties."""
        request = self.protocol.proppatch_request(path, props, headers, remove=remove)
        return await self._execute(request)

    async def mkcol(
        self,
        path: str,
        props: Optional[Dict[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> RequestOutcome:
        """Create a collection, optionally with properties."""
        return await self._execute(self.protocol.mkcol_request(path, props, headers))

    async def _execute(self, request: DAVRequest) -> RequestOutcome:
        log.debug(
            "sending request - method={0}, url={1}, headers={2}\nbody:\n{3}".format(
                request.method, request.url, dict(request.headers), request.body
            )
        )
        response = await self.io.execute(request)
        log.debug("server responded with %i" % response.status)
        log.debug("response headers: " + str(dict(response.headers)))
        if error.debug_dump_communication:
            log.debug("communication dumped to %s" % dump_communication(request, response))
        return self.protocol.decode_response(response)


async def get_davclient(
    check_config_file: bool = True,
    config_file: Optional[str] = None,
    config_section: Optional[str] = None,
    environment: bool = True,
    **config_data: Any,
) -> AsyncDAVClient:
    """
    Get an async DAV client instance, with connection parameters
    taken from the arguments, the environment or a configuration file
    (see `davclient.config.connection_params`).

    Example:
        async with await get_davclient() as client:
            outcome = await client.propfind("/")
    """
    from . import config

    return AsyncDAVClient(
        **config.connection_params(
            check_config_file=check_config_file,
            config_file=config_file,
            config_section_name=config_section,
            environment=environment,
            **config_data,
        )
    )
