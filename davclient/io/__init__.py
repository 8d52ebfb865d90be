"""
HTTP transports for davclient.

SyncIO sends through requests, AsyncIO through aiohttp.  Both take a
DAVRequest from davclient.protocol and return a DAVResponse, and leave
parsing to DAVProtocol.decode_response:

    protocol = DAVProtocol(base_url="https://dav.example.com/")
    async with AsyncIO() as io:
        response = await io.execute(protocol.propfind_request("/files/", depth=1))
        outcome = protocol.decode_response(response)
"""

from .base import AsyncIOProtocol, SyncIOProtocol
from .sync import SyncIO
from .async_ import AsyncIO

__all__ = [
    "SyncIOProtocol",
    "AsyncIOProtocol",
    "SyncIO",
    "AsyncIO",
]
