# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains the client for the Service Bus REST API"""

import logging
import ssl
from typing import Optional, Union
from typing_extensions import Self

from . import constant
from . import exceptions as exc
from . import http_map_error
from . import http_path
from . import signing_mechanism as sm
from . import connection_string as cs
from . import sastoken as st
from . import config, models
from .http_call_context import HttpCallContext
from .http_transport import HTTPTransport, HTTPResponse

logger = logging.getLogger(__name__)


class ServiceBusRestProxy:
    """Client for sending and receiving messages, and for managing queues, topics,
    subscriptions and rules, over the Service Bus REST API.

    Every operation is a single blocking request/response exchange made by the transport.
    The client holds no state that changes between operations, so it can be shared across
    threads as long as the transport can.
    """

    def __init__(self, transport) -> None:
        """
        :param transport: Object that makes HTTP requests. It must provide an
            ``execute(context)`` method returning a response with ``status_code``, ``headers``
            (with case-insensitive lookup) and ``body``
        :type transport: :class:`azure.servicebusrest.http_transport.HTTPTransport`
        """
        self._transport = transport

    @classmethod
    def from_connection_string(
        cls,
        connection_string: str,
        ssl_context: Optional[ssl.SSLContext] = None,
        sastoken_ttl: int = 3600,
        **kwargs,
    ) -> Self:
        """Instantiate a ServiceBusRestProxy using a Service Bus connection string

        :returns: A new instance of ServiceBusRestProxy
        :rtype: ServiceBusRestProxy

        :param str connection_string: The Service Bus connection string
        :param ssl_context: Custom SSL context to be used when making requests.
            If not provided, a default one will be used
        :type ssl_context: :class:`ssl.SSLContext`
        :param sastoken_ttl: Time-to-live (in seconds) for SAS tokens used for authentication.
            Default is 3600 seconds (1 hour).

        :keyword str product_info: Arbitrary product information which will be included in the
            User-Agent string
        :keyword proxy_options: Configuration structure for sending traffic through a proxy server
        :type: proxy_options: :class:`ProxyOptions`
        :keyword timeout: Number of seconds to wait on the network for a single HTTP request
        :keyword str server_verification_cert: The trusted certificate chain. Only necessary when
            the service presents a certificate not trusted by the default certificate store

        :raises: ValueError if the provided connection string is invalid
        :raises: TypeError if an unsupported keyword argument is provided
        """
        cs_obj = cs.ConnectionString(connection_string)
        hostname = cs_obj.hostname
        if cs.SHARED_ACCESS_KEY in cs_obj:
            uri = "https://{}/{}".format(hostname, cs_obj.get(cs.ENTITY_PATH, ""))
            signing_mechanism = sm.SymmetricKeySigningMechanism(cs_obj[cs.SHARED_ACCESS_KEY])
            sastoken: Union[st.RenewableSasToken, st.NonRenewableSasToken] = st.RenewableSasToken(
                uri,
                signing_mechanism,
                key_name=cs_obj[cs.SHARED_ACCESS_KEY_NAME],
                ttl=sastoken_ttl,
            )
        else:
            try:
                sastoken = st.NonRenewableSasToken(cs_obj[cs.SHARED_ACCESS_SIGNATURE])
            except exc.SasTokenError as e:
                raise ValueError("Invalid SAS Token in Connection String") from e

        client_config = config.ServiceBusClientConfig(
            hostname=hostname,
            ssl_context=ssl_context,
            sastoken_provider=st.SasTokenProvider(sastoken),
            **kwargs,
        )
        return cls(HTTPTransport(client_config))

    def _send_context(self, context: HttpCallContext) -> HTTPResponse:
        """Have the transport make the request, and reject any response that is not a success

        :raises: ServiceError if the response status is not accepted by the context
        """
        response = self._transport.execute(context)
        if not context.accepts(response.status_code):
            logger.error(
                "{} request to '{}' failed with status {}".format(
                    context.method, context.path, response.status_code
                )
            )
            raise http_map_error.translate_error(response)
        return response

    # Messages #

    def send_message(self, path: str, message: models.BrokeredMessage) -> None:
        """Send a message to the queue or topic at the given path

        :param str path: The name of the queue or topic
        :param message: The message to send
        :type message: :class:`BrokeredMessage`

        :raises: ServiceError if the service does not accept the message
        :raises: ConnectionFailedError if the request could not be completed
        """
        context = HttpCallContext()
        context.set_method(constant.HTTP_POST)
        context.set_path(http_path.get_send_message_path(path))
        context.add_status_code(constant.STATUS_CREATED)

        if message.content_type is not None:
            context.add_header(constant.CONTENT_TYPE_HEADER, message.content_type)
        broker_properties = message.broker_properties.to_string()
        # An empty record encodes as "{}", which carries nothing worth sending
        if broker_properties != "{}":
            context.add_header(constant.BROKER_PROPERTIES_HEADER, broker_properties)
        for name, value in message.custom_properties.items():
            context.add_header(name, str(value))
        context.set_body(message.body)

        self._send_context(context)
        logger.info("Successfully sent message to '{}'".format(path))

    def send_queue_message(self, queue_name: str, message: models.BrokeredMessage) -> None:
        """Send a message to a queue"""
        self.send_message(queue_name, message)

    def send_topic_message(self, topic_name: str, message: models.BrokeredMessage) -> None:
        """Send a message to a topic"""
        self.send_message(topic_name, message)

    def receive_message(
        self, path: str, options: models.ReceiveMessageOptions
    ) -> Optional[models.BrokeredMessage]:
        """Receive a message from the given receive path

        :param str path: The receive path of a queue or subscription
        :param options: How to receive the message. A receive mode must be set.
        :type options: :class:`ReceiveMessageOptions`

        :returns: The received message, or None if no message was available
        :rtype: :class:`BrokeredMessage`

        :raises: ConfigurationError if no receive mode is set in the options
        :raises: ServiceError if the service does not accept the request
        :raises: ConnectionFailedError if the request could not be completed
        """
        context = HttpCallContext()
        if options.is_receive_and_delete:
            context.set_method(constant.HTTP_DELETE)
        elif options.is_peek_lock:
            context.set_method(constant.HTTP_POST)
        else:
            raise exc.ConfigurationError(
                "Receive mode must be set to either receive-and-delete or peek-lock"
            )
        context.set_path(path)
        if options.timeout is not None:
            context.add_query_parameter(constant.QP_TIMEOUT, options.timeout)
        context.add_status_codes(
            [constant.STATUS_CREATED, constant.STATUS_NO_CONTENT, constant.STATUS_OK]
        )

        response = self._send_context(context)
        if response.status_code == constant.STATUS_NO_CONTENT:
            logger.info("No message available at '{}'".format(path))
            return None

        message = self._create_message_from_response(response, options)
        logger.info("Successfully received message from '{}'".format(path))
        return message

    def _create_message_from_response(self, response, options):
        headers = response.headers
        broker_properties = models.BrokerProperties.from_string(
            headers.get(constant.BROKER_PROPERTIES_HEADER)
        )
        location = headers.get(constant.LOCATION_HEADER)
        if options.is_peek_lock and location:
            broker_properties.lock_location = location

        message = models.BrokeredMessage(response.body, broker_properties=broker_properties)
        if constant.CONTENT_TYPE_HEADER in headers:
            message.content_type = headers[constant.CONTENT_TYPE_HEADER]
        if constant.DATE_HEADER in headers:
            message.date = headers[constant.DATE_HEADER]
        # Every header is exposed, including the ones interpreted above
        for name, value in headers.items():
            message.set_property(name, value)
        return message

    def receive_queue_message(
        self, queue_name: str, options: models.ReceiveMessageOptions
    ) -> Optional[models.BrokeredMessage]:
        """Receive a message from a queue. See .receive_message() for details."""
        return self.receive_message(http_path.get_receive_queue_message_path(queue_name), options)

    def receive_subscription_message(
        self, topic_name: str, subscription_name: str, options: models.ReceiveMessageOptions
    ) -> Optional[models.BrokeredMessage]:
        """Receive a message from a subscription. See .receive_message() for details."""
        return self.receive_message(
            http_path.get_receive_subscription_message_path(topic_name, subscription_name), options
        )

    def unlock_message(self, message: models.BrokeredMessage) -> None:
        """Release the lock on a peek-locked message, making it available to be received again

        :raises: ConfigurationError if the message was not received in peek-lock mode
        :raises: MessageLockLostError if the lock has already expired
        :raises: ServiceError if the service does not accept the request
        """
        context = HttpCallContext()
        context.set_method(constant.HTTP_PUT)
        context.set_path(http_path.get_lock_location_path(message.lock_location))
        context.add_status_code(constant.STATUS_OK)
        self._send_context(context)
        logger.info("Successfully unlocked message")

    def delete_message(self, message: models.BrokeredMessage) -> None:
        """Delete a peek-locked message, acknowledging that it has been processed

        :raises: ConfigurationError if the message was not received in peek-lock mode
        :raises: MessageLockLostError if the lock has already expired
        :raises: ServiceError if the service does not accept the request
        """
        context = HttpCallContext()
        context.set_method(constant.HTTP_DELETE)
        context.set_path(http_path.get_lock_location_path(message.lock_location))
        context.add_status_code(constant.STATUS_OK)
        self._send_context(context)
        logger.info("Successfully deleted message")

    # Resource management #

    def _create(self, path, info):
        context = HttpCallContext()
        context.set_method(constant.HTTP_PUT)
        context.set_path(path)
        context.add_header(constant.CONTENT_TYPE_HEADER, constant.ATOM_ENTRY_CONTENT_TYPE)
        context.add_status_code(constant.STATUS_CREATED)
        context.set_body(info.to_xml())
        return self._send_context(context)

    def _get(self, path):
        context = HttpCallContext()
        context.set_method(constant.HTTP_GET)
        context.set_path(path)
        context.add_status_code(constant.STATUS_OK)
        return self._send_context(context)

    def _delete(self, path):
        context = HttpCallContext()
        context.set_method(constant.HTTP_DELETE)
        context.set_path(path)
        context.add_status_code(constant.STATUS_OK)
        self._send_context(context)

    def _list(self, path, options):
        context = HttpCallContext()
        context.set_method(constant.HTTP_GET)
        context.set_path(path)
        context.add_status_code(constant.STATUS_OK)
        if options is not None:
            # Empty and zero values are left out, leaving the choice to the service
            if options.top:
                context.add_query_parameter(constant.QP_TOP, options.top)
            if options.skip:
                context.add_query_parameter(constant.QP_SKIP, options.skip)
        return self._send_context(context)

    def create_queue(self, queue_info: models.QueueInfo) -> models.CreateQueueResult:
        """Create a queue

        :param queue_info: The name and settings of the queue
        :type queue_info: :class:`QueueInfo`

        :returns: The queue as created by the service
        :rtype: :class:`CreateQueueResult`

        :raises: ConfigurationError if the queue has no name, or invalid settings
        :raises: ConflictError if the queue already exists
        :raises: ServiceError if the service does not accept the request
        :raises: MalformedResponse if the response is not an Atom entry
        :raises: SchemaViolation if the response does not describe a queue
        """
        response = self._create(http_path.get_queue_path(queue_info.title), queue_info)
        result = models.CreateQueueResult.from_xml(response.body)
        logger.info("Successfully created queue '{}'".format(queue_info.title))
        return result

    def get_queue(self, queue_name: str) -> models.GetQueueResult:
        """Get the settings of a queue

        :raises: NotFoundError if there is no such queue
        :raises: ServiceError if the service does not accept the request
        :raises: MalformedResponse if the response is not an Atom entry
        :raises: SchemaViolation if the response does not describe a queue
        """
        response = self._get(http_path.get_queue_path(queue_name))
        return models.GetQueueResult.from_xml(response.body)

    def delete_queue(self, queue_name: str) -> None:
        """Delete a queue, and any messages it holds"""
        self._delete(http_path.get_queue_path(queue_name))
        logger.info("Successfully deleted queue '{}'".format(queue_name))

    def list_queues(
        self, options: Optional[models.ListQueuesOptions] = None
    ) -> models.ListQueuesResult:
        """List the queues of the namespace, in the order returned by the service

        :raises: ServiceError if the service does not accept the request
        :raises: MalformedResponse if the response is not an Atom feed
        :raises: SchemaViolation if an entry of the feed does not describe a queue
        """
        response = self._list(http_path.get_list_queues_path(), options)
        return models.ListQueuesResult.from_xml(response.body)

    def create_topic(self, topic_info: models.TopicInfo) -> models.CreateTopicResult:
        """Create a topic. See .create_queue() for details."""
        response = self._create(http_path.get_topic_path(topic_info.title), topic_info)
        result = models.CreateTopicResult.from_xml(response.body)
        logger.info("Successfully created topic '{}'".format(topic_info.title))
        return result

    def get_topic(self, topic_name: str) -> models.GetTopicResult:
        response = self._get(http_path.get_topic_path(topic_name))
        return models.GetTopicResult.from_xml(response.body)

    def delete_topic(self, topic_name: str) -> None:
        """Delete a topic, along with its subscriptions"""
        self._delete(http_path.get_topic_path(topic_name))
        logger.info("Successfully deleted topic '{}'".format(topic_name))

    def list_topics(
        self, options: Optional[models.ListTopicsOptions] = None
    ) -> models.ListTopicsResult:
        response = self._list(http_path.get_list_topics_path(), options)
        return models.ListTopicsResult.from_xml(response.body)

    def create_subscription(
        self, topic_name: str, subscription_info: models.SubscriptionInfo
    ) -> models.CreateSubscriptionResult:
        """Create a subscription to a topic. See .create_queue() for details."""
        path = http_path.get_subscription_path(topic_name, subscription_info.title)
        response = self._create(path, subscription_info)
        result = models.CreateSubscriptionResult.from_xml(response.body)
        logger.info("Successfully created subscription '{}'".format(path))
        return result

    def get_subscription(
        self, topic_name: str, subscription_name: str
    ) -> models.GetSubscriptionResult:
        response = self._get(http_path.get_subscription_path(topic_name, subscription_name))
        return models.GetSubscriptionResult.from_xml(response.body)

    def delete_subscription(self, topic_name: str, subscription_name: str) -> None:
        path = http_path.get_subscription_path(topic_name, subscription_name)
        self._delete(path)
        logger.info("Successfully deleted subscription '{}'".format(path))

    def list_subscriptions(
        self, topic_name: str, options: Optional[models.ListSubscriptionsOptions] = None
    ) -> models.ListSubscriptionsResult:
        response = self._list(http_path.get_list_subscriptions_path(topic_name), options)
        return models.ListSubscriptionsResult.from_xml(response.body)

    def create_rule(
        self, topic_name: str, subscription_name: str, rule_info: models.RuleInfo
    ) -> models.CreateRuleResult:
        """Create a rule of a subscription. See .create_queue() for details."""
        path = http_path.get_rule_path(topic_name, subscription_name, rule_info.title)
        response = self._create(path, rule_info)
        result = models.CreateRuleResult.from_xml(response.body)
        logger.info("Successfully created rule '{}'".format(path))
        return result

    def get_rule(
        self, topic_name: str, subscription_name: str, rule_name: str
    ) -> models.GetRuleResult:
        response = self._get(http_path.get_rule_path(topic_name, subscription_name, rule_name))
        return models.GetRuleResult.from_xml(response.body)

    def delete_rule(self, topic_name: str, subscription_name: str, rule_name: str) -> None:
        path = http_path.get_rule_path(topic_name, subscription_name, rule_name)
        self._delete(path)
        logger.info("Successfully deleted rule '{}'".format(path))

    def list_rules(
        self,
        topic_name: str,
        subscription_name: str,
        options: Optional[models.ListRulesOptions] = None,
    ) -> models.ListRulesResult:
        response = self._list(http_path.get_list_rules_path(topic_name, subscription_name), options)
        return models.ListRulesResult.from_xml(response.body)
