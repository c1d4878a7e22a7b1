# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains the info objects of queues, topics, subscriptions and rules.

An info object pairs the name of a resource (the title of its Atom entry) with its description.
"""

import logging
from typing import Optional
from typing_extensions import Self
from .. import atom
from .. import constant
from .. import description_serializer
from ..exceptions import SchemaViolation
from .descriptions import (
    QueueDescription,
    TopicDescription,
    SubscriptionDescription,
    RuleDescription,
)

logger = logging.getLogger(__name__)


class ResourceInfo(object):
    """Base of all info objects.

    :ivar str title: The name of the resource
    :ivar description: The settings of the resource
    :ivar str id: Atom id, when echoed by the service
    :ivar str published: Atom published timestamp, when echoed by the service
    :ivar str updated: Atom updated timestamp, when echoed by the service
    """

    _description_cls = None
    _description_tag = ""

    def __init__(self, title: Optional[str] = None, description=None) -> None:
        """
        :param str title: The name of the resource, used verbatim in its path
        :param description: The settings of the resource. Default settings if not provided.
        """
        self.title = title
        self.description = description if description is not None else self._description_cls()
        self.id = None
        self.published = None
        self.updated = None

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self.__dict__ == other.__dict__

    def __repr__(self):
        return "{}(title={!r}, description={!r})".format(
            type(self).__name__, self.title, self.description
        )

    def to_entry(self) -> atom.Entry:
        """Wrap the description of the resource in an Atom entry"""
        return atom.create_entry(
            description_serializer.serialize(self.description)
        )

    def to_xml(self) -> bytes:
        """Write the resource as the Atom entry document sent to create it"""
        return atom.serialize_entry(self.to_entry())

    @classmethod
    def from_entry(cls, source: atom.XmlSource) -> Self:
        """Read an info object from an Atom entry.

        :param source: The raw Atom entry, or an entry element already parsed from a feed

        :raises: MalformedResponse if the source is not an Atom entry
        :raises: SchemaViolation if the entry has no title, or no valid description
        """
        entry = atom.parse_entry(source)
        if not entry.title:
            raise SchemaViolation("title", "Atom entry has no title")
        if entry.content is None or entry.content.element is None:
            raise SchemaViolation(
                cls._description_tag, "Atom entry '{}' has no content".format(entry.title)
            )
        element = entry.content.element
        if atom.local_name(element.tag) != cls._description_tag:
            raise SchemaViolation(
                cls._description_tag,
                "Expected '{}' content, found '{}'".format(
                    cls._description_tag, atom.local_name(element.tag)
                ),
            )

        info = cls(entry.title, description_serializer.parse(element, cls._description_cls))
        info.id = entry.id
        info.published = entry.published
        info.updated = entry.updated
        logger.debug("Parsed {} '{}'".format(cls.__name__, info.title))
        return info


class QueueInfo(ResourceInfo):
    """The name and settings of a queue"""

    _description_cls = QueueDescription
    _description_tag = constant.QUEUE_DESCRIPTION


class TopicInfo(ResourceInfo):
    """The name and settings of a topic"""

    _description_cls = TopicDescription
    _description_tag = constant.TOPIC_DESCRIPTION


class SubscriptionInfo(ResourceInfo):
    """The name and settings of a subscription. The topic is not part of the info."""

    _description_cls = SubscriptionDescription
    _description_tag = constant.SUBSCRIPTION_DESCRIPTION


class RuleInfo(ResourceInfo):
    """The name and settings of a rule. The topic and subscription are not part of the info."""

    _description_cls = RuleDescription
    _description_tag = constant.RULE_DESCRIPTION
