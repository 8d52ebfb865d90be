"""
WebDAV protocol operations combining request building and response parsing.

This class provides a high-level interface to WebDAV operations while
remaining completely I/O-free.
"""

import base64
import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from requests.structures import CaseInsensitiveDict

from davclient.lib import error
from davclient.lib import url as urlutil
from davclient.lib.namespace import NamespaceRegistry

from .types import ClientConfig, DAVMethod, DAVRequest, DAVResponse, RequestOutcome
from .xml_builders import build_mkcol_body, build_propfind_body, build_proppatch_body
from .xml_parsers import is_multistatus_response, parse_multistatus

PLAIN_CONTENT_TYPE = "text/plain;charset=utf-8"
XML_CONTENT_TYPE = "application/xml; charset=utf-8"

log = logging.getLogger(__name__)

Depth = Union[int, str, None]


class DAVProtocol:
    """
    Sans-I/O WebDAV protocol handler.

    Builds requests and parses responses without doing any I/O.
    All HTTP communication is delegated to an external I/O implementation.

    Example:
        protocol = DAVProtocol(base_url="https://dav.example.com/")

        # Build request
        request = protocol.propfind_request("/files/", ["{DAV:}displayname"], depth=1)

        # Execute with your I/O (not shown)
        response = io.execute(request)

        # Decode response, then apply the depth policy
        outcome = protocol.shape_propfind(protocol.decode_response(response), 1)
    """

    def __init__(
        self,
        base_url: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        namespaces: Optional[Union[NamespaceRegistry, Dict[str, str]]] = None,
        huge_tree: bool = False,
    ):
        """
        Initialize the protocol handler.

        Args:
            base_url: Base URL for the WebDAV server
            username: Username for Basic authentication
            password: Password for Basic authentication
            namespaces: Namespace URI -> prefix mapping, on top of DAV:
            huge_tree: Allow parsing very large XML documents
        """
        self.config = ClientConfig(base_url=base_url, username=username, password=password)
        if isinstance(namespaces, NamespaceRegistry):
            self.xml_namespaces = namespaces
        else:
            self.xml_namespaces = NamespaceRegistry(namespaces)
        self.huge_tree = huge_tree
        self._auth_header = self._build_auth_header(username, password)

    def _build_auth_header(
        self,
        username: Optional[str],
        password: Optional[str],
    ) -> Optional[str]:
        """Build Basic auth header if a username is configured."""
        if username is None:
            return None
        credentials = f"{username}:{password or ''}"
        encoded = base64.b64encode(credentials.encode("utf-8")).decode("ascii")
        return f"Basic {encoded}"

    def resolve_url(self, path: str) -> str:
        """Absolute URLs as they are, paths anchored at the base URL's root."""
        return urlutil.resolve_url(self.config.base_url, path)

    def parse_url(self, url: str) -> urlutil.ParsedURL:
        return urlutil.parse_url(url)

    # =========================================================================
    # Request builders
    # =========================================================================

    def build_request(
        self,
        method: Union[DAVMethod, str],
        path: str,
        headers: Optional[Mapping[str, str]] = None,
        body: Union[str, bytes, None] = None,
        content_type: str = PLAIN_CONTENT_TYPE,
        depth: Depth = None,
    ) -> DAVRequest:
        """
        Build any request.

        Defaults (Content-Type, Authorization, and Depth when given) are
        set first; caller headers are applied on top and win.

        Args:
            method: HTTP verb
            path: Resource path or URL
            headers: Extra headers
            body: Request body; str is UTF-8 encoded
            content_type: Default Content-Type
            depth: Depth header value, not validated

        Returns:
            DAVRequest ready for execution
        """
        if isinstance(method, DAVMethod):
            method = method.value
        if body is None:
            body = b""
        elif isinstance(body, str):
            body = body.encode("utf-8")

        combined_headers = CaseInsensitiveDict({"Content-Type": content_type})
        if self._auth_header:
            combined_headers["Authorization"] = self._auth_header
        if depth is not None:
            combined_headers["Depth"] = str(depth)
        combined_headers.update(headers or {})

        return DAVRequest(
            method=method,
            url=self.resolve_url(path),
            headers=combined_headers,
            body=body,
        )

    def propfind_request(
        self,
        path: str,
        props: Optional[Iterable[str]] = None,
        depth: Depth = None,
        headers: Optional[Mapping[str, str]] = None,
        allprop: bool = False,
    ) -> DAVRequest:
        """
        Build a PROPFIND request.

        Args:
            path: Resource path or URL
            props: Property keys to retrieve
            depth: 0, 1 or "infinity"; 0 if not given
            headers: Extra headers
            allprop: Ask for all properties instead

        Returns:
            DAVRequest ready for execution
        """
        body = build_propfind_body(props, self.xml_namespaces, allprop=allprop)
        return self.build_request(
            DAVMethod.PROPFIND,
            path,
            headers,
            body,
            content_type=XML_CONTENT_TYPE,
            depth=0 if depth is None else depth,
        )

    def proppatch_request(
        self,
        path: str,
        props: Optional[Dict[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        remove: Optional[Iterable[str]] = None,
    ) -> DAVRequest:
        """
        Build a PROPPATCH request.

        Args:
            path: Resource path or URL
            props: Properties to set (key -> value)
            headers: Extra headers
            remove: Property keys to remove

        Returns:
            DAVRequest ready for execution
        """
        body = build_proppatch_body(props, self.xml_namespaces, remove_props=remove)
        return self.build_request(
            DAVMethod.PROPPATCH, path, headers, body, content_type=XML_CONTENT_TYPE
        )

    def mkcol_request(
        self,
        path: str,
        props: Optional[Dict[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> DAVRequest:
        """
        Build a MKCOL request.  Without properties the body is empty,
        Content-Type is set all the same.
        """
        body = build_mkcol_body(props, self.xml_namespaces)
        return self.build_request(
            DAVMethod.MKCOL, path, headers, body, content_type=XML_CONTENT_TYPE
        )

    # =========================================================================
    # Response handling
    # =========================================================================

    def decode_response(self, response: DAVResponse) -> RequestOutcome:
        """
        Turn a transport response into a RequestOutcome.

        Bodies whose root element is a DAV:multistatus are parsed,
        anything else is passed on untouched.  The status code is not
        interpreted.
        """
        headers = CaseInsensitiveDict(response.headers)
        body: Any = response.body
        if is_multistatus_response(headers, body):
            try:
                body = parse_multistatus(body, self.xml_namespaces, huge_tree=self.huge_tree)
            except error.ResponseError as e:
                log.debug("leaving body unparsed: %s", e.reason)
        return RequestOutcome(
            status=response.status,
            body=body,
            headers=headers,
            raw=response.raw,
        )

    @staticmethod
    def shape_propfind(outcome: RequestOutcome, depth: Depth = None) -> RequestOutcome:
        """
        PROPFIND with depth 0 (the default) is about one resource, so a
        parsed multistatus body is replaced by its only element.  Other
        depths, and bodies that weren't parsed, are left alone.
        """
        if depth is None or str(depth) == "0":
            if isinstance(outcome.body, list):
                outcome.body = outcome.body[0] if outcome.body else None
        return outcome
