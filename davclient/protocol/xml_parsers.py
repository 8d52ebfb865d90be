"""
Pure functions for parsing WebDAV XML responses.

All functions in this module take XML bytes in and return structured
data out, with no I/O.
"""

import logging
import re
from typing import Mapping, Optional, Tuple, Union

from lxml import etree
from lxml.etree import _Element
from requests.structures import CaseInsensitiveDict

from davclient.elements import dav
from davclient.lib import error
from davclient.lib.namespace import NamespaceRegistry, ns

from .types import MultiStatus, PropertyDescriptor, PropertyValue, PropStat, ResourceResult

log = logging.getLogger(__name__)

_MULTISTATUS_RE = re.compile(rb"<([\w.-]+:)?multistatus[\s/>]")


def is_multistatus_response(headers: Mapping[str, str], body: Union[bytes, str, None]) -> bool:
    """
    True if the response says it is XML and carries a multistatus
    element somewhere.  The body is not parsed here, so this is a cheap
    filter only; the root element is checked by parse_multistatus.
    """
    content_type = CaseInsensitiveDict(headers).get("Content-Type") or ""
    if "xml" not in content_type.lower() or not body:
        return False
    if isinstance(body, str):
        body = body.encode("utf-8")
    return _MULTISTATUS_RE.search(body) is not None


def _parse_xml(body: bytes, huge_tree: bool) -> _Element:
    """
    Parse strictly.  Servers sometimes use prefixes they never declare;
    if that is all that is wrong with the document it is parsed again in
    recovery mode, and the undeclared elements keep their prefixed name
    (``oc:fileid``) for the registry to resolve.
    """
    try:
        return etree.fromstring(body, etree.XMLParser(huge_tree=huge_tree))
    except etree.XMLSyntaxError as e:
        errors = [x for x in e.error_log if x.level >= etree.ErrorLevels.ERROR]
        if not errors or any(
            entry.type != etree.ErrorTypes.NS_ERR_UNDEFINED_NAMESPACE for entry in errors
        ):
            raise error.MalformedXMLError(reason=str(e)) from e
        log.debug("undeclared namespace prefixes in response: %s", e)
    tree = etree.fromstring(body, etree.XMLParser(recover=True, huge_tree=huge_tree))
    if tree is None:
        raise error.MalformedXMLError(reason="no root element")
    return tree


def parse_multistatus(
    body: Union[bytes, str],
    registry: Optional[NamespaceRegistry] = None,
    huge_tree: bool = False,
) -> MultiStatus:
    """
    Parse a 207 Multi-Status response body.

    Args:
        body: Raw XML response
        registry: Used to resolve prefixes the document never declared
        huge_tree: Allow parsing very large XML documents

    Returns:
        One ResourceResult per ``response`` element, in document order

    Raises:
        MalformedXMLError: If body is not valid XML
        ResponseError: If the root element is not a multistatus
    """
    if registry is None:
        registry = NamespaceRegistry()
    if isinstance(body, str):
        body = body.encode("utf-8")

    tree = _parse_xml(body, huge_tree)
    if _element_key(tree, registry) != dav.MultiStatus.tag:
        raise error.ResponseError(reason="expected a multistatus document, got %s" % tree.tag)

    return [
        _parse_response_element(elem, registry)
        for elem in tree
        if _element_key(elem, registry) == dav.Response.tag
    ]


def _parse_response_element(response: _Element, registry: NamespaceRegistry) -> ResourceResult:
    """
    Parse a single DAV:response element.  The href is kept exactly as
    sent, no unquoting.
    """
    result = ResourceResult()
    for elem in response:
        key = _element_key(elem, registry)
        if key == dav.Href.tag:
            result.href = elem.text or ""
        elif key == dav.PropStat.tag:
            result.propstat.append(_parse_propstat(elem, registry))
    if result.href is None:
        error.weirdness("response element without href", response)
    return result


def _parse_propstat(propstat: _Element, registry: NamespaceRegistry) -> PropStat:
    group = PropStat()
    for elem in propstat:
        key = _element_key(elem, registry)
        if key == dav.Status.tag:
            group.status = elem.text
        elif key == dav.Prop.tag:
            for prop in elem:
                if not isinstance(prop.tag, str):
                    ## comments and processing instructions
                    continue
                prop_key = _element_key(prop, registry)
                if prop_key is None:
                    log.debug("dropping property %s, its namespace is unknown", prop.tag)
                    continue
                group.properties[prop_key] = _property_value(prop, registry)
    return group


def _element_key(elem: _Element, registry: NamespaceRegistry) -> Optional[str]:
    if not isinstance(elem.tag, str):
        return None
    uri, localname = _resolve_name(elem, registry)
    if uri is None:
        return None
    return ns(uri, localname)


def _resolve_name(elem: _Element, registry: NamespaceRegistry) -> Tuple[Optional[str], str]:
    """
    Return (namespace URI, local name) of an element.

    Namespaces declared in the document are taken as they are.  A
    prefix the document never declared ends up as part of the tag
    (``x:foo``); such prefixes are looked up in the registry, and
    (None, name) is returned if that fails too.
    """
    tag = elem.tag
    if tag.startswith("{"):
        uri, _, localname = tag[1:].partition("}")
        return uri, localname
    prefix, sep, localname = tag.partition(":")
    if not sep:
        return None, tag
    return registry.resolve_uri(prefix), localname


def _node_name(elem: _Element) -> str:
    tag = elem.tag
    if not tag.startswith("{"):
        return tag
    localname = tag.partition("}")[2]
    if elem.prefix:
        return "%s:%s" % (elem.prefix, localname)
    return localname


def _property_value(elem: _Element, registry: NamespaceRegistry) -> PropertyValue:
    """
    Text content for simple properties ("" when empty), a list of
    child descriptors when the value is markup.  Text next to or below
    the children is not kept.
    """
    children = [child for child in elem if isinstance(child.tag, str)]
    if not children:
        ## only comments or processing instructions inside, if anything
        return "".join([elem.text or ""] + [child.tail or "" for child in elem])
    return [
        PropertyDescriptor(
            namespace_uri=_resolve_name(child, registry)[0],
            node_name=_node_name(child),
        )
        for child in children
    ]
