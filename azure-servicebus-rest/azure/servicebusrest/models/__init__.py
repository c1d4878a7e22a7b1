"""Azure Service Bus REST Models

This package provides the data models for messages, resource descriptions, and operation results.
"""

from .broker_properties import BrokerProperties
from .message import BrokeredMessage, ReceiveMessageOptions
from .descriptions import (
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
)
from .info import QueueInfo, TopicInfo, SubscriptionInfo, RuleInfo
from .results import (
    ListOptions,
    ListQueuesOptions,
    ListTopicsOptions,
    ListSubscriptionsOptions,
    ListRulesOptions,
    CreateQueueResult,
    GetQueueResult,
    CreateTopicResult,
    GetTopicResult,
    CreateSubscriptionResult,
    GetSubscriptionResult,
    CreateRuleResult,
    GetRuleResult,
    ListQueuesResult,
    ListTopicsResult,
    ListSubscriptionsResult,
    ListRulesResult,
)
