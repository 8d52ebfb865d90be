#!/usr/bin/env python
from typing import ClassVar

from .base import BaseElement
from davclient.lib.namespace import DAV_NS
from davclient.lib.namespace import ns


# Operations
class Propfind(BaseElement):
    tag: ClassVar[str] = ns(DAV_NS, "propfind")


class PropertyUpdate(BaseElement):
    tag: ClassVar[str] = ns(DAV_NS, "propertyupdate")


class Mkcol(BaseElement):
    tag: ClassVar[str] = ns(DAV_NS, "mkcol")


# Components / Data


class Prop(BaseElement):
    tag: ClassVar[str] = ns(DAV_NS, "prop")


class Allprop(BaseElement):
    tag: ClassVar[str] = ns(DAV_NS, "allprop")


class Set(BaseElement):
    tag: ClassVar[str] = ns(DAV_NS, "set")


class Remove(BaseElement):
    tag: ClassVar[str] = ns(DAV_NS, "remove")


# Response elements


class MultiStatus(BaseElement):
    tag: ClassVar[str] = ns(DAV_NS, "multistatus")


class Response(BaseElement):
    tag: ClassVar[str] = ns(DAV_NS, "response")


class Href(BaseElement):
    tag: ClassVar[str] = ns(DAV_NS, "href")


class PropStat(BaseElement):
    tag: ClassVar[str] = ns(DAV_NS, "propstat")


class Status(BaseElement):
    tag: ClassVar[str] = ns(DAV_NS, "status")
