#!/usr/bin/env python
import logging
import os
from typing import Optional

from davclient import __version__

## Environmental variables prepended with "PYTHON_DAVCLIENT" are used for debug purposes,
## DAV_URL, DAV_USERNAME and DAV_PASSWORD are connection parameters
debug_dump_communication = os.environ.get("PYTHON_DAVCLIENT_COMMDUMP", False)
## one of DEBUG, DEVELOPMENT, PRODUCTION
debugmode = os.environ.get("PYTHON_DAVCLIENT_DEBUGMODE")
if not debugmode:
    if "dev" in __version__:
        debugmode = "DEVELOPMENT"
    else:
        debugmode = "PRODUCTION"

log = logging.getLogger("davclient")
if debugmode.startswith("DEBUG"):
    log.setLevel(logging.DEBUG)
else:
    log.setLevel(logging.WARNING)


def weirdness(*reasons) -> None:
    from davclient.lib.debug import xmlstring

    reason = " : ".join([xmlstring(x) for x in reasons])
    log.warning(f"Deviation from expectations found: {reason}")


class DAVError(Exception):
    url: Optional[str] = None
    reason: str = "no reason"

    def __init__(self, url: Optional[str] = None, reason: Optional[str] = None) -> None:
        if url:
            self.url = url
        if reason:
            self.reason = reason

    def __str__(self) -> str:
        return "%s at '%s', reason %s" % (
            self.__class__.__name__,
            self.url,
            self.reason,
        )


class MalformedXMLError(DAVError):
    """
    The server claimed to send a multistatus document, but the body
    could not be parsed as XML.  The original lxml error is available
    as ``__cause__``.
    """

    pass


class ResponseError(DAVError):
    pass


class ConfigurationError(DAVError):
    pass
