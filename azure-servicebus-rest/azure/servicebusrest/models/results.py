# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains the results of resource management operations, and the options used to
list resources.
"""

import logging
from .. import atom
from .info import QueueInfo, TopicInfo, SubscriptionInfo, RuleInfo

logger = logging.getLogger(__name__)


class ListOptions(object):
    """Pagination options for listing resources. Unset options leave the choice to the service.

    :ivar int top: Maximum number of resources to return
    :ivar int skip: Number of resources to skip
    """

    def __init__(self, top=None, skip=None):
        self.top = top
        self.skip = skip


ListQueuesOptions = ListOptions
ListTopicsOptions = ListOptions
ListSubscriptionsOptions = ListOptions
ListRulesOptions = ListOptions


# Single resource results #


class _InfoResult(object):
    _info_cls = None

    def __init__(self, info):
        self.info = info

    @classmethod
    def from_xml(cls, body):
        """Parse the result from the Atom entry returned by the service"""
        return cls(cls._info_cls.from_entry(body))


class CreateQueueResult(_InfoResult):
    """The queue as created by the service. :ivar queue_info: :class:`QueueInfo`"""

    _info_cls = QueueInfo

    @property
    def queue_info(self):
        return self.info


class GetQueueResult(CreateQueueResult):
    """The queue as returned by the service. :ivar queue_info: :class:`QueueInfo`"""


class CreateTopicResult(_InfoResult):
    """The topic as created by the service. :ivar topic_info: :class:`TopicInfo`"""

    _info_cls = TopicInfo

    @property
    def topic_info(self):
        return self.info


class GetTopicResult(CreateTopicResult):
    """The topic as returned by the service. :ivar topic_info: :class:`TopicInfo`"""


class CreateSubscriptionResult(_InfoResult):
    """The subscription as created by the service.

    :ivar subscription_info: :class:`SubscriptionInfo`
    """

    _info_cls = SubscriptionInfo

    @property
    def subscription_info(self):
        return self.info


class GetSubscriptionResult(CreateSubscriptionResult):
    """The subscription as returned by the service.

    :ivar subscription_info: :class:`SubscriptionInfo`
    """


class CreateRuleResult(_InfoResult):
    """The rule as created by the service. :ivar rule_info: :class:`RuleInfo`"""

    _info_cls = RuleInfo

    @property
    def rule_info(self):
        return self.info


class GetRuleResult(CreateRuleResult):
    """The rule as returned by the service. :ivar rule_info: :class:`RuleInfo`"""


# List results #


class _ListResult(object):
    _info_cls = None

    def __init__(self, infos=None):
        self.infos = list(infos) if infos else []

    def __iter__(self):
        return iter(self.infos)

    def __len__(self):
        return len(self.infos)

    def __getitem__(self, index):
        return self.infos[index]

    @classmethod
    def from_xml(cls, body):
        """Parse the result from the Atom feed returned by the service.

        Infos are in the order of the entries in the feed. An empty or entry-less feed gives an
        empty result. Any entry that fails to parse fails the whole result.
        """
        feed = atom.parse_feed(body)
        infos = [cls._info_cls.from_entry(entry) for entry in feed]
        logger.debug("Parsed {} {} object(s)".format(len(infos), cls._info_cls.__name__))
        return cls(infos)


class ListQueuesResult(_ListResult):
    _info_cls = QueueInfo

    @property
    def queue_infos(self):
        return self.infos


class ListTopicsResult(_ListResult):
    _info_cls = TopicInfo

    @property
    def topic_infos(self):
        return self.infos


class ListSubscriptionsResult(_ListResult):
    _info_cls = SubscriptionInfo

    @property
    def subscription_infos(self):
        return self.infos


class ListRulesResult(_ListResult):
    _info_cls = RuleInfo

    @property
    def rule_infos(self):
        return self.infos
