#!/usr/bin/env python
"""
Namespace handling.

A `NamespaceRegistry` maps namespace URIs to short prefixes.  It is
used both ways: URI -> prefix when request bodies are serialized, and
prefix -> URI when a response document uses a prefix it never
declared.

The registry is per client instance.  It is meant to be configured
before requests are issued; mutating it while requests are in flight
is the caller's responsibility.
"""
from collections.abc import MutableMapping
from typing import Dict
from typing import Iterator
from typing import Optional
from typing import Tuple

DAV_NS = "DAV:"
DAV_PREFIX = "d"


def ns(uri: str, tag: Optional[str] = None) -> str:
    """Build a property key, ``{uri}tag``"""
    name = "{%s}" % uri
    if tag is not None:
        name = "%s%s" % (name, tag)
    return name


def split_key(key: str) -> Tuple[str, str]:
    """
    Split a property key like ``{DAV:}getetag`` into
    ``("DAV:", "getetag")``.  Keys without a namespace are refused.
    """
    if not key.startswith("{") or "}" not in key:
        raise ValueError("property key %r is not namespace qualified" % key)
    uri, _, localname = key[1:].partition("}")
    if not localname:
        raise ValueError("property key %r has no local name" % key)
    return uri, localname


class NamespaceRegistry(MutableMapping):
    """
    Bidirectional namespace URI <-> prefix mapping.

    Behaves like a dict of URI -> prefix, so additional namespaces are
    added the obvious way::

        client.xml_namespaces["http://owncloud.org/ns"] = "oc"

    The ``DAV:`` -> ``d`` entry is always present and cannot be changed.
    """

    adhoc_prefix = "x"

    def __init__(self, namespaces: Optional[Dict[str, str]] = None) -> None:
        self._prefixes: Dict[str, str] = {DAV_NS: DAV_PREFIX}
        self._uris: Dict[str, str] = {DAV_PREFIX: DAV_NS}
        if namespaces:
            self.update(namespaces)

    def __getitem__(self, uri: str) -> str:
        return self._prefixes[uri]

    def __setitem__(self, uri: str, prefix: str) -> None:
        if uri == DAV_NS:
            if prefix != DAV_PREFIX:
                raise ValueError("the DAV: namespace is bound to %r" % DAV_PREFIX)
            return
        if not prefix:
            raise ValueError("empty prefix for namespace %r" % uri)
        owner = self._uris.get(prefix)
        if owner is not None and owner != uri:
            raise ValueError(
                "prefix %r is already bound to namespace %r" % (prefix, owner)
            )
        old_prefix = self._prefixes.get(uri)
        if old_prefix is not None:
            del self._uris[old_prefix]
        self._prefixes[uri] = prefix
        self._uris[prefix] = uri

    def __delitem__(self, uri: str) -> None:
        if uri == DAV_NS:
            raise ValueError("the DAV: namespace cannot be removed")
        prefix = self._prefixes.pop(uri)
        del self._uris[prefix]

    def __iter__(self) -> Iterator[str]:
        return iter(self._prefixes)

    def __len__(self) -> int:
        return len(self._prefixes)

    def __repr__(self) -> str:
        return "NamespaceRegistry(%r)" % self._prefixes

    def resolve_prefix(self, uri: str) -> Optional[str]:
        return self._prefixes.get(uri)

    def resolve_uri(self, prefix: str) -> Optional[str]:
        return self._uris.get(prefix)

    def register(self, uri: str, prefix: Optional[str] = None) -> str:
        """
        Make sure `uri` has a prefix and return it.

        If the namespace is already known its prefix is returned as is.
        Otherwise `prefix` is used, or the first free one out of
        ``x1``, ``x2``, ...
        """
        known = self._prefixes.get(uri)
        if known is not None:
            return known
        if prefix is None:
            i = 1
            while "%s%i" % (self.adhoc_prefix, i) in self._uris:
                i += 1
            prefix = "%s%i" % (self.adhoc_prefix, i)
        self[uri] = prefix
        return prefix

    @property
    def nsmap(self) -> Dict[str, str]:
        """prefix -> URI, the way lxml wants it"""
        return dict(self._uris)

    def copy(self) -> "NamespaceRegistry":
        return NamespaceRegistry(self._prefixes)
