# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains the Atom envelope (entry, feed and content) that wraps every Service Bus
resource description on the wire.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Dict, List, Optional, Union
from xml.sax.saxutils import escape, quoteattr
from . import constant
from .exceptions import MalformedResponse

logger = logging.getLogger(__name__)

XmlSource = Union[bytes, str, ET.Element]

XMLNS = "xmlns"
XMLNS_ATOM = "xmlns:atom"
XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'

_ATOM_METADATA_FIELDS = ["title", "id", "published", "updated"]


def local_name(tag: str) -> str:
    """Return the tag of an element with any namespace removed"""
    return tag.rsplit("}", 1)[-1]


def parse_xml(source: XmlSource) -> ET.Element:
    """Parse raw XML into an element tree, returning the root element.

    :raises: MalformedResponse if the source is not well-formed XML
    """
    if isinstance(source, ET.Element):
        return source
    try:
        return ET.fromstring(source)
    except ET.ParseError as e:
        raise MalformedResponse("Response body is not well-formed XML") from e


class Content:
    """The content of an Atom entry: a typed XML fragment.

    :ivar str type: The media type of the content
    """

    def __init__(
        self,
        text: Optional[str] = None,
        type: str = constant.XML_CONTENT_TYPE,
        element: Optional[ET.Element] = None,
    ) -> None:
        """
        :param str text: The XML fragment carried by the content, written out verbatim
        :param str type: The media type of the content
        :param element: The parsed XML fragment, when the content was read from a response
        """
        self._text = text
        self.type = type
        self._element = element

    @property
    def text(self) -> str:
        if self._text is None:
            if self._element is None:
                return ""
            self._text = ET.tostring(self._element, encoding="unicode")
        return self._text

    @property
    def element(self) -> Optional[ET.Element]:
        if self._element is None and self._text:
            self._element = parse_xml(self._text)
        return self._element


class Entry:
    """An Atom entry.

    :ivar dict attributes: Attributes of the entry element, e.g. namespace declarations
    :ivar content: The content of the entry (optional)
    :ivar str title: Atom title (optional)
    :ivar str id: Atom id (optional)
    :ivar str published: Atom published timestamp (optional)
    :ivar str updated: Atom updated timestamp (optional)
    :ivar list extension_elements: Any other child elements, in document order
    """

    def __init__(
        self,
        content: Optional[Content] = None,
        attributes: Optional[Dict[str, str]] = None,
        title: Optional[str] = None,
        id: Optional[str] = None,
        published: Optional[str] = None,
        updated: Optional[str] = None,
        extension_elements: Optional[List[ET.Element]] = None,
    ) -> None:
        self.content = content
        self.attributes = attributes if attributes is not None else {}
        self.title = title
        self.id = id
        self.published = published
        self.updated = updated
        self.extension_elements = extension_elements if extension_elements is not None else []

    def set_attribute(self, name: str, value: str) -> None:
        self.attributes[name] = value


class Feed:
    """An Atom feed: an ordered sequence of entries."""

    def __init__(self, entries: Optional[List[ET.Element]] = None) -> None:
        self.entries = entries if entries is not None else []

    def __iter__(self):
        return iter(self.entries)

    def __len__(self):
        return len(self.entries)


def create_entry(content_xml: str) -> Entry:
    """Create an Atom entry wrapping a Service Bus description, with the required namespaces"""
    entry = Entry(content=Content(content_xml, type=constant.XML_CONTENT_TYPE))
    entry.set_attribute(XMLNS_ATOM, constant.ATOM_NAMESPACE)
    entry.set_attribute(XMLNS, constant.SERVICE_BUS_NAMESPACE)
    return entry


def serialize_entry(entry: Entry) -> bytes:
    """Write an Atom entry as a UTF-8 encoded XML document.

    Content is written verbatim, since it is already an XML fragment.
    """
    parts = [XML_DECLARATION, "<atom:entry"]
    attributes = dict(entry.attributes)
    # The atom prefix is always used for the envelope, so it must always be declared
    attributes.setdefault(XMLNS_ATOM, constant.ATOM_NAMESPACE)
    for name, value in attributes.items():
        parts.append(" {}={}".format(name, quoteattr(value)))
    parts.append(">")
    for field in _ATOM_METADATA_FIELDS:
        value = getattr(entry, field)
        if value is not None:
            parts.append(
                "<atom:{field}>{value}</atom:{field}>".format(field=field, value=escape(value))
            )
    for element in entry.extension_elements:
        parts.append(ET.tostring(element, encoding="unicode"))
    if entry.content is not None:
        parts.append(
            "<atom:content type={}>{}</atom:content>".format(
                quoteattr(entry.content.type), entry.content.text
            )
        )
    parts.append("</atom:entry>")
    return "".join(parts).encode("utf-8")


def parse_entry(source: XmlSource) -> Entry:
    """Read an Atom entry from raw XML or an already parsed element.

    :raises: MalformedResponse if the source is not an Atom entry
    """
    root = parse_xml(source)
    if local_name(root.tag) != "entry":
        raise MalformedResponse(
            "Expected an Atom 'entry' element, found '{}'".format(local_name(root.tag))
        )

    entry = Entry(attributes=dict(root.attrib))
    for child in root:
        name = local_name(child.tag)
        if name == "content":
            fragment = next(iter(child), None)
            entry.content = Content(
                type=child.get("type", constant.XML_CONTENT_TYPE), element=fragment
            )
        elif name in _ATOM_METADATA_FIELDS:
            setattr(entry, name, (child.text or "").strip())
        else:
            entry.extension_elements.append(child)
    return entry


def parse_feed(source: Union[bytes, str]) -> Feed:
    """Read the entries of an Atom feed, in document order.

    An empty body, a document that is not a feed, or a feed with no entries all produce an
    empty Feed.

    :raises: MalformedResponse if the source is not well-formed XML
    """
    if not source or not source.strip():
        logger.debug("Empty feed body")
        return Feed()
    root = parse_xml(source)
    if local_name(root.tag) != "feed":
        logger.debug("Document root is '{}', not a feed".format(local_name(root.tag)))
        return Feed()
    return Feed([child for child in root if local_name(child.tag) == "entry"])
