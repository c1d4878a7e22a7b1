# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains a class representing messages that are sent or received, and the options
used to receive them.
"""
from .broker_properties import BrokerProperties

RECEIVE_AND_DELETE = "receive_and_delete"
PEEK_LOCK = "peek_lock"


def _broker_property(name, doc):
    def getter(self):
        return getattr(self.broker_properties, name)

    def setter(self, value):
        setattr(self.broker_properties, name, value)

    return property(getter, setter, doc=doc)


class BrokeredMessage(object):
    """Represents a message sent to, or received from, a queue, topic or subscription

    :ivar body: The data that constitutes the payload
    :ivar str content_type: Media type of the payload (optional)
    :ivar custom_properties: Dictionary of custom message properties. Keys are case-sensitive,
        and are sent as HTTP headers, so they must not be the name of a reserved header.
    :ivar broker_properties: Delivery metadata of the message
    :type broker_properties: :class:`BrokerProperties`
    :ivar str date: Value of the Date header the message was received with
    """

    def __init__(self, body=b"", content_type=None, broker_properties=None, custom_properties=None):
        """
        Initializer for BrokeredMessage

        :param body: The data that constitutes the payload. A str is sent UTF-8 encoded.
        :param str content_type: Media type of the payload
        :param broker_properties: Delivery metadata of the message
        :type broker_properties: :class:`BrokerProperties`
        :param dict custom_properties: Custom message properties
        """
        self.body = body
        self.content_type = content_type
        self.broker_properties = (
            broker_properties if broker_properties is not None else BrokerProperties()
        )
        self.custom_properties = dict(custom_properties) if custom_properties else {}
        self.date = None

    def __str__(self):
        return str(self.body)

    def get_property(self, name, default=None):
        return self.custom_properties.get(name, default)

    def set_property(self, name, value):
        self.custom_properties[name] = value

    message_id = _broker_property("message_id", "A user-settable identifier for the message")
    correlation_id = _broker_property(
        "correlation_id", "Identifier relating a reply to a request, in request-reply patterns"
    )
    session_id = _broker_property("session_id", "Session the message belongs to")
    label = _broker_property("label", "Application specific label")
    reply_to = _broker_property("reply_to", "Address to reply to")
    to = _broker_property("to", "Address the message is sent to")
    time_to_live = _broker_property("time_to_live", "Time to live of the message, in seconds")
    scheduled_enqueue_time_utc = _broker_property(
        "scheduled_enqueue_time_utc", "Time the message is to be enqueued"
    )
    reply_to_session_id = _broker_property("reply_to_session_id", "Session id to reply to")
    lock_token = _broker_property("lock_token", "Lock token of a peek-locked message")
    sequence_number = _broker_property("sequence_number", "Unique number assigned by the service")
    delivery_count = _broker_property("delivery_count", "Number of times delivered")
    locked_until_utc = _broker_property("locked_until_utc", "Time the lock expires")
    enqueued_time_utc = _broker_property("enqueued_time_utc", "Time the message was enqueued")
    lock_location = _broker_property(
        "lock_location", "URL of the lock, only set after a peek-lock receive"
    )
    message_location = _broker_property("message_location", "URL of the message")


class ReceiveMessageOptions(object):
    """Options for receiving a message.

    A receive mode must be chosen with either set_receive_and_delete() or set_peek_lock()
    before the options are used.

    :ivar int timeout: Seconds the service waits for a message to arrive (optional)
    """

    def __init__(self, timeout=None):
        self.timeout = timeout
        self._receive_mode = None

    def set_receive_and_delete(self):
        """Remove the message from the service as it is received"""
        self._receive_mode = RECEIVE_AND_DELETE
        return self

    def set_peek_lock(self):
        """Lock the message on the service until it is unlocked or deleted"""
        self._receive_mode = PEEK_LOCK
        return self

    @property
    def receive_mode(self):
        return self._receive_mode

    @property
    def is_receive_and_delete(self):
        return self._receive_mode == RECEIVE_AND_DELETE

    @property
    def is_peek_lock(self):
        return self._receive_mode == PEEK_LOCK
