#!/usr/bin/env python
"""
URL helpers.

Paths handed to the client may be

1) a fully qualified URL, i.e. "https://dav.example.com/files/foo.txt",
   which is used as is, or

2) a path, i.e. "/files/foo.txt", which is anchored at the root
   (scheme, host and port) of the base URL.

Remark that the path component of the base URL is *not* prepended when
resolving a path: with a base URL of "https://example.com/dav/",
"/foo" resolves to "https://example.com/foo".  Existing callers depend
on this, so it stays.
"""
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

ABSOLUTE_URL_RE = re.compile(r"^[a-z][a-z0-9+.-]*://", re.IGNORECASE)


@dataclass(frozen=True)
class ParsedURL:
    """
    The syntactic parts of a URL,
    ``scheme://host[:port][/path][?query][#fragment]``.

    Parts not present in the URL are None.  `root` is
    ``scheme://host[:port]``.
    """

    url: str
    scheme: Optional[str]
    host: Optional[str]
    root: Optional[str]
    port: Optional[int] = None
    path: Optional[str] = None
    query: Optional[str] = None
    fragment: Optional[str] = None


def is_absolute_url(path: str) -> bool:
    return bool(ABSOLUTE_URL_RE.match(path))


def parse_url(url: str) -> ParsedURL:
    parts = urlsplit(url)
    ## userinfo is not part of the root
    hostport = parts.netloc.rpartition("@")[2]
    port = parts.port
    host = hostport
    if port is not None:
        host = hostport.rpartition(":")[0]
    root = None
    if parts.scheme and hostport:
        root = "%s://%s" % (parts.scheme, hostport)
    return ParsedURL(
        url=url,
        scheme=parts.scheme or None,
        host=host or None,
        root=root,
        port=port,
        path=parts.path or None,
        query=parts.query or None,
        fragment=parts.fragment or None,
    )


def resolve_url(base_url: str, path: str) -> str:
    """
    Turn `path` into an absolute URL.  Absolute URLs are returned
    unchanged, anything else is appended to the root of `base_url`.
    A trailing slash is kept.
    """
    if is_absolute_url(path):
        return path
    root = parse_url(base_url).root
    if root is None:
        raise ValueError("base URL %r has no scheme and host" % base_url)
    if not path.startswith("/"):
        path = "/" + path
    return root + path
