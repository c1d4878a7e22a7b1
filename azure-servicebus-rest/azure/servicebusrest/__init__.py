""" Azure Service Bus REST Library

This library provides a client for sending and receiving messages, and for managing queues,
topics, subscriptions and rules, using the Azure Service Bus REST API.
"""

from .service_bus_rest_proxy import ServiceBusRestProxy  # noqa: F401
from .http_transport import HTTPTransport  # noqa: F401
from .config import ServiceBusClientConfig, ProxyOptions  # noqa: F401
from .exceptions import (  # noqa: F401
    ServiceBusError,
    ConfigurationError,
    SasTokenError,
    ConnectionFailedError,
    MalformedResponse,
    SchemaViolation,
    ServiceError,
    ArgumentError,
    UnauthorizedError,
    QuotaExceededError,
    NotFoundError,
    ConflictError,
    MessageLockLostError,
    PreconditionFailedError,
    MessageSizeExceededError,
    ThrottlingError,
    InternalServerError,
    ServiceUnavailableError,
)
from .models import (  # noqa: F401
    BrokeredMessage,
    BrokerProperties,
    ReceiveMessageOptions,
    QueueDescription,
    TopicDescription,
    SubscriptionDescription,
    RuleDescription,
    SqlFilter,
    TrueFilter,
    FalseFilter,
    CorrelationFilter,
    SqlRuleAction,
    EmptyRuleAction,
    QueueInfo,
    TopicInfo,
    SubscriptionInfo,
    RuleInfo,
    ListOptions,
    ListQueuesOptions,
    ListTopicsOptions,
    ListSubscriptionsOptions,
    ListRulesOptions,
)
