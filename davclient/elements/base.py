#!/usr/bin/env python
import sys
from typing import ClassVar
from typing import Dict
from typing import List
from typing import Optional
from typing import Union

from lxml import etree
from lxml.etree import _Element

from davclient.lib.namespace import DAV_NS
from davclient.lib.namespace import DAV_PREFIX

if sys.version_info < (3, 9):
    from typing import Iterable
else:
    from collections.abc import Iterable

if sys.version_info < (3, 11):
    from typing_extensions import Self
else:
    from typing import Self


class BaseElement:
    """
    Builder for a piece of XML.  Elements are combined with ``+``::

        dav.Propfind() + (dav.Prop() + [dav.GetEtag(), dav.DisplayName()])

    and turned into lxml with `xmlelement`, which declares the given
    namespace map on the root element only.
    """

    children: Optional[List[Self]] = None
    tag: ClassVar[Optional[str]] = None
    value: Optional[str] = None
    attributes: Optional[dict] = None

    def __init__(
        self, name: Optional[str] = None, value: Union[str, bytes, None] = None
    ) -> None:
        self.children = []
        self.attributes = {}
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        self.value = None
        if name is not None:
            self.attributes["name"] = name
        if value is not None:
            self.value = value

    def __add__(
        self, other: Union["BaseElement", Iterable["BaseElement"]]
    ) -> "BaseElement":
        return self.append(other)

    def __str__(self) -> str:
        utf8 = etree.tostring(
            self.xmlelement(), encoding="utf-8", xml_declaration=True, pretty_print=True
        )
        return str(utf8, "utf-8")

    def xmlelement(self, nsmap: Optional[Dict[str, str]] = None) -> _Element:
        if self.tag is None:
            raise ValueError("Unexpected value None for self.tag")

        root = etree.Element(self.tag, nsmap=nsmap or {DAV_PREFIX: DAV_NS})
        self._fill(root)
        return root

    def _fill(self, node: _Element) -> None:
        if self.attributes is None:
            raise ValueError("Unexpected value None for self.attributes")

        if self.value is not None:
            node.text = self.value

        for k in self.attributes:
            node.set(k, self.attributes[k])

        self.xmlchildren(node)

    def xmlchildren(self, root: _Element) -> None:
        if self.children is None:
            raise ValueError("Unexpected value None for self.children")

        for c in self.children:
            c._fill(etree.SubElement(root, c.tag))

    def append(self, element: Union[Self, Iterable[Self]]) -> Self:
        if self.children is None:
            raise ValueError("Unexpected value None for self.children")

        if isinstance(element, Iterable):
            self.children.extend(element)
        else:
            self.children.append(element)

        return self


class ValuedBaseElement(BaseElement):
    def __init__(self, value: Union[str, bytes, None] = None) -> None:
        super(ValuedBaseElement, self).__init__(value=value)


class Property(ValuedBaseElement):
    """
    An arbitrary property, identified by its key (``{uri}localname``).

    The tag is per instance rather than per class, since properties
    from any namespace may be requested or set.
    """

    def __init__(self, key: str, value: Union[str, bytes, None] = None) -> None:
        super(Property, self).__init__(value=value)
        self.tag = key
