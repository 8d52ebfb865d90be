"""
Core protocol types for the Sans-I/O WebDAV implementation.

These dataclasses represent HTTP requests and responses at the protocol level,
independent of any I/O implementation, and the structured values a
multistatus document is decoded into.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

from requests.structures import CaseInsensitiveDict


class DAVMethod(Enum):
    """HTTP methods the client builds requests for."""

    GET = "GET"
    PUT = "PUT"
    DELETE = "DELETE"
    PROPFIND = "PROPFIND"
    PROPPATCH = "PROPPATCH"
    MKCOL = "MKCOL"
    OPTIONS = "OPTIONS"
    HEAD = "HEAD"
    MOVE = "MOVE"
    COPY = "COPY"
    POST = "POST"


@dataclass(frozen=True)
class ClientConfig:
    """
    Connection parameters of a client.

    Attributes:
        base_url: URL whose root (scheme, host, port) paths are resolved against
        username: Username for Basic authentication
        password: Password for Basic authentication
    """

    base_url: str
    username: Optional[str] = None
    password: Optional[str] = None


@dataclass(frozen=True)
class DAVRequest:
    """
    Represents an HTTP request to be made.

    This is a pure data structure with no I/O. It describes what request
    should be made, but does not make it.

    Attributes:
        method: HTTP method (GET, PUT, PROPFIND, or any other verb)
        url: Full URL for the request
        headers: HTTP headers
        body: Request body as bytes
    """

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=CaseInsensitiveDict)
    body: bytes = b""


@dataclass(frozen=True)
class DAVResponse:
    """
    Represents an HTTP response as delivered by a transport.

    Attributes:
        status: HTTP status code
        headers: HTTP headers
        body: Response body as bytes
        raw: The transport library's own response object
    """

    status: int
    headers: Mapping[str, str]
    body: bytes
    raw: Any = None


@dataclass(frozen=True)
class PropertyDescriptor:
    """
    One child element of a structured property value, i.e. the
    ``<d:collection/>`` inside ``<d:resourcetype>``.

    Attributes:
        namespace_uri: Namespace of the child element
        node_name: Qualified name as written in the document, like "d:collection"
    """

    namespace_uri: Optional[str]
    node_name: str


PropertyValue = Union[str, List[PropertyDescriptor]]


@dataclass
class PropStat:
    """
    A group of properties sharing one status.

    Attributes:
        status: Raw status line, like "HTTP/1.1 404 Not Found"
        properties: Property key -> value
    """

    status: Optional[str] = None
    properties: Dict[str, PropertyValue] = field(default_factory=dict)

    @property
    def status_code(self) -> Optional[int]:
        """Numeric code of the status line, or None if there is none."""
        if not self.status:
            return None
        parts = self.status.split()
        if len(parts) >= 2 and parts[1].isdigit():
            return int(parts[1])
        return None


@dataclass
class ResourceResult:
    """
    Parsed result of one ``response`` element.

    Attributes:
        href: Path of the resource, exactly as sent by the server
        propstat: Property groups in document order
    """

    href: Optional[str] = None
    propstat: List[PropStat] = field(default_factory=list)

    @property
    def properties(self) -> Dict[str, PropertyValue]:
        """All properties of all groups merged, later groups winning."""
        merged: Dict[str, PropertyValue] = {}
        for group in self.propstat:
            merged.update(group.properties)
        return merged


MultiStatus = List[ResourceResult]


@dataclass
class RequestOutcome:
    """
    What a request settles with.

    Attributes:
        status: HTTP status code
        body: Parsed multistatus (a list of ResourceResult, or a single
              one after PROPFIND depth shaping) or the raw body bytes
        headers: Response headers
        raw: The transport's own response object, not interpreted here
    """

    status: int
    body: Any
    headers: Mapping[str, str] = field(default_factory=CaseInsensitiveDict)
    raw: Any = None

    @property
    def text(self) -> str:
        """The raw body decoded as UTF-8."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        if isinstance(self.body, str):
            return self.body
        raise TypeError("body has been parsed, there is no text to return")
