#!/usr/bin/env python
"""
Blocking WebDAV client.

Same operations as `AsyncDAVClient`, but every call returns the
RequestOutcome directly.  HTTP error statuses are delivered as
outcomes, only transport failures (requests exceptions) raise.
"""
import logging
from types import TracebackType
from typing import Any, Dict, Iterable, Mapping, Optional, Type, Union

from davclient.io import SyncIO, SyncIOProtocol
from davclient.lib import error
from davclient.lib.debug import dump_communication
from davclient.lib.namespace import NamespaceRegistry
from davclient.lib.url import ParsedURL
from davclient.protocol import DAVMethod, DAVProtocol, DAVRequest, RequestOutcome
from davclient.protocol.operations import Depth

log = logging.getLogger("davclient")


class DAVClient:
    """
    Basic client for WebDAV, using the requests library.

    Example:
        with DAVClient("https://dav.example.com/", "user", "secret") as client:
            outcome = client.propfind("/files/readme.txt", ["{DAV:}getcontentlength"])
            print(outcome.body.propstat[0].properties)
    """

    def __init__(
        self,
        url: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        namespaces: Optional[Union[NamespaceRegistry, Dict[str, str]]] = None,
        io: Optional[SyncIOProtocol] = None,
        timeout: float = 30.0,
        ssl_verify_cert: bool = True,
        huge_tree: bool = False,
    ) -> None:
        """
        Sets up a client object.  No communication with the server
        happens here.

        Args:
            url: Base URL; paths are resolved against its root
            username: Username for Basic authentication
            password: Password for Basic authentication
            namespaces: Namespace URI -> prefix mapping, on top of DAV:
            io: Transport to use instead of a requests based one
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
        self.io = io or SyncIO(timeout=timeout, verify=ssl_verify_cert)

    def __enter__(self) -> "DAVClient":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        self.close()

    def close(self) -> None:
        """
        Closes the transport, if this client created it.
        """
        if self._owns_io:
            self.io.close()

    @property
    def url(self) -> str:
        return self.protocol.config.base_url

    @property
    def xml_namespaces(self) -> NamespaceRegistry:
        return self.protocol.xml_namespaces

    def resolve_url(self, path: str) -> str:
        return self.protocol.resolve_url(path)

    def parse_url(self, url: str) -> ParsedURL:
        return self.protocol.parse_url(url)

    def request(
        self,
        method: Union[DAVMethod, str],
        path: str,
        headers: Optional[Mapping[str, str]] = None,
        body: Union[str, bytes, None] = None,
    ) -> RequestOutcome:
        """
        Send any request; see `AsyncDAVClient.request`.
        """
        return self._execute(self.protocol.build_request(method, path, headers, body))

    def propfind(
        self,
        path: str,
        props: Optional[Iterable[str]] = None,
        depth: Depth = None,
        headers: Optional[Mapping[str, str]] = None,
        allprop: bool = False,
    ) -> RequestOutcome:
        """
        Send a PROPFIND request.  With depth 0 (the default) the body
        of the outcome is the single ResourceResult, not a list.
        """
        request = self.protocol.propfind_request(path, props, depth, headers, allprop=allprop)
        return self.protocol.shape_propfind(self._execute(request), depth)

    def proppatch(
        self,
        path: str,
        props: Optional[Dict[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        remove: Optional[Iterable[str]] = None,
    ) -> RequestOutcome:
        request = self.protocol.proppatch_request(path, props, headers, remove=remove)
        return self._execute(request)

    def mkcol(
        self,
        path: str,
        props: Optional[Dict[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> RequestOutcome:
        return self._execute(self.protocol.mkcol_request(path, props, headers))

    def _execute(self, request: DAVRequest) -> RequestOutcome:
        log.debug(
            "sending request - method={0}, url={1}, headers={2}\nbody:\n{3}".format(
                request.method, request.url, dict(request.headers), request.body
            )
        )
        response = self.io.execute(request)
        log.debug("server responded with %i" % response.status)
        log.debug("response headers: " + str(dict(response.headers)))
        if error.debug_dump_communication:
            log.debug("communication dumped to %s" % dump_communication(request, response))
        return self.protocol.decode_response(response)


def get_davclient(
    check_config_file: bool = True,
    config_file: Optional[str] = None,
    config_section: Optional[str] = None,
    environment: bool = True,
    **config_data,
) -> DAVClient:
    """
    This function will yield a DAVClient object.  It will not try to
    connect.  It will read configuration from various sources, dependent
    on the parameters given, in this order:

    * Data from the parameters given
    * The environment variables `DAV_URL`, `DAV_USERNAME`, `DAV_PASSWORD`.
    * Configuration file, named by `config_file` or `DAV_CONFIG_FILE`.
    """
    from . import config

    return DAVClient(
        **config.connection_params(
            check_config_file=check_config_file,
            config_file=config_file,
            config_section_name=config_section,
            environment=environment,
            **config_data,
        )
    )
