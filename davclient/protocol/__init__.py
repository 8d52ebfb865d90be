"""
Sans-I/O WebDAV protocol implementation.

This module provides protocol-level operations without any I/O.
It builds requests and parses responses as pure data transformations.

The protocol layer is organized into:
- types: Core data structures (DAVRequest, DAVResponse, result types)
- xml_builders: Pure functions to build XML request bodies
- xml_parsers: Pure functions to parse XML response bodies
- operations: High-level DAVProtocol class combining builders and parsers

Example usage:

    from davclient.protocol import DAVProtocol

    protocol = DAVProtocol(base_url="https://dav.example.com")

    # Build a request (no I/O)
    request = protocol.propfind_request(
        path="/files/",
        props=["{DAV:}displayname", "{DAV:}resourcetype"],
        depth=1
    )

    # Execute via your preferred I/O (sync, async, or mock)
    response = your_http_client.execute(request)

    # Parse response (no I/O)
    outcome = protocol.decode_response(response)
"""

from .types import (
    # Enums
    DAVMethod,
    # Configuration
    ClientConfig,
    # Request/Response
    DAVRequest,
    DAVResponse,
    RequestOutcome,
    # Result types
    MultiStatus,
    PropertyDescriptor,
    PropertyValue,
    PropStat,
    ResourceResult,
)
from .xml_builders import (
    build_mkcol_body,
    build_propfind_body,
    build_proppatch_body,
)
from .xml_parsers import (
    is_multistatus_response,
    parse_multistatus,
)
from .operations import DAVProtocol

__all__ = [
    # Enums
    "DAVMethod",
    # Configuration
    "ClientConfig",
    # Request/Response
    "DAVRequest",
    "DAVResponse",
    "RequestOutcome",
    # Result types
    "MultiStatus",
    "PropertyDescriptor",
    "PropertyValue",
    "PropStat",
    "ResourceResult",
    # XML Builders
    "build_mkcol_body",
    "build_propfind_body",
    "build_proppatch_body",
    # XML Parsers
    "is_multistatus_response",
    "parse_multistatus",
    # Protocol
    "DAVProtocol",
]
