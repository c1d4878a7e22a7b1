# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains the settings objects (descriptions) of queues, topics, subscriptions and
rules, along with the filters and actions a rule is made of.

These are msrest models. The order of each ``_attribute_map`` is the order of elements mandated
by the Service Bus schema. Attributes left as None are not sent to the service.
"""
import datetime
from typing import Optional, Union
from msrest.serialization import Model
from ..constant import XML_SCHEMA_INSTANCE_NAMESPACE

Duration = Union[datetime.timedelta, str]

# Filters and actions carry their concrete type in an "i:type" attribute
_type_attribute = {
    "key": "type",
    "type": "str",
    "xml": {"name": "type", "attr": True, "prefix": "i", "ns": XML_SCHEMA_INSTANCE_NAMESPACE},
}


class QueueDescription(Model):
    """The settings of a queue.

    Durations are read as :class:`datetime.timedelta`. When sending, an ISO 8601 duration
    string (e.g. "PT1M" for one minute) is also accepted.

    :ivar lock_duration: How long a peek-locked message stays locked
    :ivar int max_size_in_megabytes: Maximum size of the queue
    :ivar bool requires_duplicate_detection: If the queue detects duplicate messages
    :ivar bool requires_session: If the queue supports sessions
    :ivar default_message_time_to_live: Time to live of a message that does not set one
    :ivar bool dead_lettering_on_message_expiration: If expired messages are dead-lettered
    :ivar duplicate_detection_history_time_window: How long message ids are remembered
        for duplicate detection
    :ivar int max_delivery_count: Deliveries after which a message is dead-lettered
    :ivar bool enable_batched_operations: If server-side batched operations are enabled
    :ivar int size_in_bytes: Current size of the queue (set by the service)
    :ivar int message_count: Current number of messages in the queue (set by the service)
    """

    _attribute_map = {
        "lock_duration": {"key": "LockDuration", "type": "duration"},
        "max_size_in_megabytes": {"key": "MaxSizeInMegabytes", "type": "int"},
        "requires_duplicate_detection": {"key": "RequiresDuplicateDetection", "type": "bool"},
        "requires_session": {"key": "RequiresSession", "type": "bool"},
        "default_message_time_to_live": {"key": "DefaultMessageTimeToLive", "type": "duration"},
        "dead_lettering_on_message_expiration": {
            "key": "DeadLetteringOnMessageExpiration",
            "type": "bool",
        },
        "duplicate_detection_history_time_window": {
            "key": "DuplicateDetectionHistoryTimeWindow",
            "type": "duration",
        },
        "max_delivery_count": {"key": "MaxDeliveryCount", "type": "int"},
        "enable_batched_operations": {"key": "EnableBatchedOperations", "type": "bool"},
        "size_in_bytes": {"key": "SizeInBytes", "type": "int"},
        "message_count": {"key": "MessageCount", "type": "int"},
    }
    _xml_map = {"name": "QueueDescription"}

    def __init__(
        self,
        lock_duration: Optional[Duration] = None,
        max_size_in_megabytes: Optional[int] = None,
        requires_duplicate_detection: Optional[bool] = None,
        requires_session: Optional[bool] = None,
        default_message_time_to_live: Optional[Duration] = None,
        dead_lettering_on_message_expiration: Optional[bool] = None,
        duplicate_detection_history_time_window: Optional[Duration] = None,
        max_delivery_count: Optional[int] = None,
        enable_batched_operations: Optional[bool] = None,
        size_in_bytes: Optional[int] = None,
        message_count: Optional[int] = None,
        **kwargs
    ) -> None:
        super(QueueDescription, self).__init__(**kwargs)
        self.lock_duration = lock_duration
        self.max_size_in_megabytes = max_size_in_megabytes
        self.requires_duplicate_detection = requires_duplicate_detection
        self.requires_session = requires_session
        self.default_message_time_to_live = default_message_time_to_live
        self.dead_lettering_on_message_expiration = dead_lettering_on_message_expiration
        self.duplicate_detection_history_time_window = duplicate_detection_history_time_window
        self.max_delivery_count = max_delivery_count
        self.enable_batched_operations = enable_batched_operations
        self.size_in_bytes = size_in_bytes
        self.message_count = message_count


class TopicDescription(Model):
    """The settings of a topic. See :class:`QueueDescription` for the meaning of each setting."""

    _attribute_map = {
        "default_message_time_to_live": {"key": "DefaultMessageTimeToLive", "type": "duration"},
        "max_size_in_megabytes": {"key": "MaxSizeInMegabytes", "type": "int"},
        "requires_duplicate_detection": {"key": "RequiresDuplicateDetection", "type": "bool"},
        "duplicate_detection_history_time_window": {
            "key": "DuplicateDetectionHistoryTimeWindow",
            "type": "duration",
        },
        "enable_batched_operations": {"key": "EnableBatchedOperations", "type": "bool"},
        "size_in_bytes": {"key": "SizeInBytes", "type": "int"},
    }
    _xml_map = {"name": "TopicDescription"}

    def __init__(
        self,
        default_message_time_to_live: Optional[Duration] = None,
        max_size_in_megabytes: Optional[int] = None,
        requires_duplicate_detection: Optional[bool] = None,
        duplicate_detection_history_time_window: Optional[Duration] = None,
        enable_batched_operations: Optional[bool] = None,
        size_in_bytes: Optional[int] = None,
        **kwargs
    ) -> None:
        super(TopicDescription, self).__init__(**kwargs)
        self.default_message_time_to_live = default_message_time_to_live
        self.max_size_in_megabytes = max_size_in_megabytes
        self.requires_duplicate_detection = requires_duplicate_detection
        self.duplicate_detection_history_time_window = duplicate_detection_history_time_window
        self.enable_batched_operations = enable_batched_operations
        self.size_in_bytes = size_in_bytes


class SubscriptionDescription(Model):
    """The settings of a subscription.

    See :class:`QueueDescription` for the meaning of most settings.

    :ivar bool dead_lettering_on_filter_evaluation_exceptions: If messages that cause a filter
        evaluation error are dead-lettered
    """

    _attribute_map = {
        "lock_duration": {"key": "LockDuration", "type": "duration"},
        "requires_session": {"key": "RequiresSession", "type": "bool"},
        "default_message_time_to_live": {"key": "DefaultMessageTimeToLive", "type": "duration"},
        "dead_lettering_on_message_expiration": {
            "key": "DeadLetteringOnMessageExpiration",
            "type": "bool",
        },
        "dead_lettering_on_filter_evaluation_exceptions": {
            "key": "DeadLetteringOnFilterEvaluationExceptions",
            "type": "bool",
        },
        "message_count": {"key": "MessageCount", "type": "int"},
        "max_delivery_count": {"key": "MaxDeliveryCount", "type": "int"},
        "enable_batched_operations": {"key": "EnableBatchedOperations", "type": "bool"},
    }
    _xml_map = {"name": "SubscriptionDescription"}

    def __init__(
        self,
        lock_duration: Optional[Duration] = None,
        requires_session: Optional[bool] = None,
        default_message_time_to_live: Optional[Duration] = None,
        dead_lettering_on_message_expiration: Optional[bool] = None,
        dead_lettering_on_filter_evaluation_exceptions: Optional[bool] = None,
        message_count: Optional[int] = None,
        max_delivery_count: Optional[int] = None,
        enable_batched_operations: Optional[bool] = None,
        **kwargs
    ) -> None:
        super(SubscriptionDescription, self).__init__(**kwargs)
        self.lock_duration = lock_duration
        self.requires_session = requires_session
        self.default_message_time_to_live = default_message_time_to_live
        self.dead_lettering_on_message_expiration = dead_lettering_on_message_expiration
        self.dead_lettering_on_filter_evaluation_exceptions = (
            dead_lettering_on_filter_evaluation_exceptions
        )
        self.message_count = message_count
        self.max_delivery_count = max_delivery_count
        self.enable_batched_operations = enable_batched_operations


# Filters #


class Filter(Model):
    """Base of all rule filters.

    You probably want to use the sub-classes and not this class directly. Known sub-classes
    are: SqlFilter, TrueFilter, FalseFilter, CorrelationFilter

    :ivar str type: The concrete type of the filter, written as its "i:type"
    """

    _attribute_map = {"type": _type_attribute}
    _subtype_map = {
        "type": {
            "SqlFilter": "SqlFilter",
            "TrueFilter": "TrueFilter",
            "FalseFilter": "FalseFilter",
            "CorrelationFilter": "CorrelationFilter",
        }
    }

    def __init__(self, **kwargs) -> None:
        super(Filter, self).__init__(**kwargs)
        self.type = None


class SqlFilter(Filter):
    """A filter matching messages against a SQL-92 style expression over their properties

    :param str sql_expression: Required. The expression
    :param int compatibility_level: The SQL compatibility level
    """

    _validation = {"sql_expression": {"required": True}}
    _attribute_map = {
        "type": _type_attribute,
        "sql_expression": {"key": "SqlExpression", "type": "str"},
        "compatibility_level": {"key": "CompatibilityLevel", "type": "int"},
    }

    def __init__(
        self,
        sql_expression: Optional[str] = None,
        compatibility_level: Optional[int] = None,
        **kwargs
    ) -> None:
        super(SqlFilter, self).__init__(**kwargs)
        self.sql_expression = sql_expression
        self.compatibility_level = compatibility_level
        self.type = "SqlFilter"


class TrueFilter(SqlFilter):
    """A filter matching every message"""

    _validation: dict = {}

    def __init__(self, compatibility_level: Optional[int] = None, **kwargs) -> None:
        # The expression is fixed, whatever the service echoes back
        kwargs.pop("sql_expression", None)
        super(TrueFilter, self).__init__("1=1", compatibility_level, **kwargs)
        self.type = "TrueFilter"


class FalseFilter(SqlFilter):
    """A filter matching no message"""

    _validation: dict = {}

    def __init__(self, compatibility_level: Optional[int] = None, **kwargs) -> None:
        kwargs.pop("sql_expression", None)
        super(FalseFilter, self).__init__("1=0", compatibility_level, **kwargs)
        self.type = "FalseFilter"


class CorrelationFilter(Filter):
    """A filter matching messages by correlation id

    :param str correlation_id: Required. The correlation id to match
    """

    _validation = {"correlation_id": {"required": True}}
    _attribute_map = {
        "type": _type_attribute,
        "correlation_id": {"key": "CorrelationId", "type": "str"},
    }

    def __init__(self, correlation_id: Optional[str] = None, **kwargs) -> None:
        super(CorrelationFilter, self).__init__(**kwargs)
        self.correlation_id = correlation_id
        self.type = "CorrelationFilter"


# Actions #


class RuleAction(Model):
    """Base of all rule actions.

    You probably want to use the sub-classes and not this class directly. Known sub-classes
    are: SqlRuleAction, EmptyRuleAction

    :ivar str type: The concrete type of the action, written as its "i:type"
    """

    _attribute_map = {"type": _type_attribute}
    _subtype_map = {
        "type": {"SqlRuleAction": "SqlRuleAction", "EmptyRuleAction": "EmptyRuleAction"}
    }

    def __init__(self, **kwargs) -> None:
        super(RuleAction, self).__init__(**kwargs)
        self.type = None


class SqlRuleAction(RuleAction):
    """An action modifying the properties of a matched message with a SQL-like expression

    :param str sql_expression: Required. The expression
    :param int compatibility_level: The SQL compatibility level
    """

    _validation = {"sql_expression": {"required": True}}
    _attribute_map = {
        "type": _type_attribute,
        "sql_expression": {"key": "SqlExpression", "type": "str"},
        "compatibility_level": {"key": "CompatibilityLevel", "type": "int"},
    }

    def __init__(
        self,
        sql_expression: Optional[str] = None,
        compatibility_level: Optional[int] = None,
        **kwargs
    ) -> None:
        super(SqlRuleAction, self).__init__(**kwargs)
        self.sql_expression = sql_expression
        self.compatibility_level = compatibility_level
        self.type = "SqlRuleAction"


class EmptyRuleAction(RuleAction):
    """An action that leaves matched messages unchanged"""

    def __init__(self, **kwargs) -> None:
        super(EmptyRuleAction, self).__init__(**kwargs)
        self.type = "EmptyRuleAction"


class RuleDescription(Model):
    """The settings of a rule: which messages it matches, and what it does to them.

    :ivar filter: The filter of the rule
    :type filter: :class:`Filter`
    :ivar action: The action of the rule
    :type action: :class:`RuleAction`
    :ivar str name: The name of the rule
    """

    _attribute_map = {
        "filter": {"key": "Filter", "type": "Filter"},
        "action": {"key": "Action", "type": "RuleAction"},
        "name": {"key": "Name", "type": "str"},
    }
    _xml_map = {"name": "RuleDescription"}

    def __init__(
        self,
        filter: Optional[Filter] = None,
        action: Optional[RuleAction] = None,
        name: Optional[str] = None,
        **kwargs
    ) -> None:
        super(RuleDescription, self).__init__(**kwargs)
        self.filter = filter
        self.action = action
        self.name = name


# Every model, by name, for the msrest Serializer and Deserializer
client_models = {
    cls.__name__: cls
    for cls in [
        QueueDescription,
        TopicDescription,
        SubscriptionDescription,
        RuleDescription,
        Filter,
        SqlFilter,
        TrueFilter,
        FalseFilter,
        CorrelationFilter,
        RuleAction,
        SqlRuleAction,
        EmptyRuleAction,
    ]
}
