"""
What the clients expect from a transport.

DAVClient and AsyncDAVClient accept any object with these methods, so
tests and applications can swap in their own HTTP stack.
"""

from typing import Protocol, runtime_checkable

from davclient.protocol.types import DAVRequest, DAVResponse


@runtime_checkable
class SyncIOProtocol(Protocol):
    """
    Blocking transport.  ``execute`` sends the request exactly as built
    and returns whatever the server answered, error statuses included.
    It raises only when no answer was obtained at all.
    """

    def execute(self, request: DAVRequest) -> DAVResponse: ...

    def close(self) -> None: ...


@runtime_checkable
class AsyncIOProtocol(Protocol):
    """
    Coroutine transport, same contract as SyncIOProtocol.  Several
    ``execute`` calls may be awaited at the same time.
    """

    async def execute(self, request: DAVRequest) -> DAVResponse: ...

    async def close(self) -> None: ...
