"""
Pure functions for building WebDAV XML request bodies.

All functions in this module take data in and return XML out, with no
I/O.  The one side effect is on the namespace registry: a property in a
namespace the registry does not know gets an ad-hoc prefix registered.
"""
from typing import Any
from typing import Dict
from typing import Iterable
from typing import List
from typing import Optional

from lxml import etree

from davclient.elements import dav
from davclient.elements.base import BaseElement
from davclient.elements.base import Property
from davclient.lib.namespace import NamespaceRegistry
from davclient.lib.namespace import split_key


def build_propfind_body(
    props: Optional[Iterable[str]] = None,
    registry: Optional[NamespaceRegistry] = None,
    allprop: bool = False,
) -> bytes:
    """
    Build PROPFIND request body XML.

    Args:
        props: Property keys (``{uri}name``) to retrieve.  None or an
               empty list gives an empty ``prop`` element.
        registry: Namespace prefixes to use
        allprop: If True, request all properties with ``allprop``.

    Returns:
        UTF-8 encoded XML bytes
    """
    registry = _registry(registry)
    if allprop:
        propfind = dav.Propfind() + dav.Allprop()
    else:
        propfind = dav.Propfind() + (dav.Prop() + _prop_elements(props, registry))
    return _tostring(propfind, registry)


def build_proppatch_body(
    set_props: Optional[Dict[str, Any]] = None,
    registry: Optional[NamespaceRegistry] = None,
    remove_props: Optional[Iterable[str]] = None,
) -> bytes:
    """
    Build PROPPATCH request body for setting and removing properties.

    Args:
        set_props: Properties to set (key -> value)
        registry: Namespace prefixes to use
        remove_props: Property keys to remove

    Returns:
        UTF-8 encoded XML bytes
    """
    registry = _registry(registry)
    propertyupdate = dav.PropertyUpdate()

    if set_props:
        propertyupdate += dav.Set() + (
            dav.Prop() + _valued_prop_elements(set_props, registry)
        )
    if remove_props:
        propertyupdate += dav.Remove() + (
            dav.Prop() + _prop_elements(remove_props, registry)
        )

    return _tostring(propertyupdate, registry)


def build_mkcol_body(
    set_props: Optional[Dict[str, Any]] = None,
    registry: Optional[NamespaceRegistry] = None,
) -> bytes:
    """
    Build (extended) MKCOL request body.

    Args:
        set_props: Properties to set on the new collection (key -> value)
        registry: Namespace prefixes to use

    Returns:
        UTF-8 encoded XML bytes, or b"" when there is nothing to set
    """
    if not set_props:
        return b""
    registry = _registry(registry)
    mkcol = dav.Mkcol() + (
        dav.Set() + (dav.Prop() + _valued_prop_elements(set_props, registry))
    )
    return _tostring(mkcol, registry)


def _registry(registry: Optional[NamespaceRegistry]) -> NamespaceRegistry:
    if registry is None:
        return NamespaceRegistry()
    return registry


def _prop_elements(
    keys: Optional[Iterable[str]], registry: NamespaceRegistry
) -> List[BaseElement]:
    elements: List[BaseElement] = []
    for key in keys or ():
        uri, _ = split_key(key)
        registry.register(uri)
        elements.append(Property(key))
    return elements


def _valued_prop_elements(
    props: Dict[str, Any], registry: NamespaceRegistry
) -> List[BaseElement]:
    elements: List[BaseElement] = []
    for key, value in props.items():
        uri, _ = split_key(key)
        registry.register(uri)
        if value is not None and not isinstance(value, (str, bytes)):
            value = str(value)
        elements.append(Property(key, value))
    return elements


def _tostring(root: BaseElement, registry: NamespaceRegistry) -> bytes:
    ## prefixes are only known once all properties are collected
    return etree.tostring(
        root.xmlelement(registry.nsmap), encoding="utf-8", xml_declaration=True
    )
