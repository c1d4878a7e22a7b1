# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains the delivery metadata of a brokered message, and its header encoding.

On the wire, broker properties are a compact JSON object carried in the ``BrokerProperties``
HTTP header. Date values are RFC 1123 strings (e.g. "Wed, 12 Dec 2012 19:35:11 GMT").
"""

import datetime
import email.utils
import json
import logging
from typing import Any, Dict, Optional
from typing_extensions import Self

logger = logging.getLogger(__name__)

# Python attribute -> (JSON key, value type)
_property_map = {
    "correlation_id": ("CorrelationId", "str"),
    "session_id": ("SessionId", "str"),
    "delivery_count": ("DeliveryCount", "int"),
    "locked_until_utc": ("LockedUntilUtc", "date"),
    "lock_token": ("LockToken", "str"),
    "message_id": ("MessageId", "str"),
    "label": ("Label", "str"),
    "reply_to": ("ReplyTo", "str"),
    "sequence_number": ("SequenceNumber", "int"),
    "time_to_live": ("TimeToLive", "float"),
    "to": ("To", "str"),
    "scheduled_enqueue_time_utc": ("ScheduledEnqueueTimeUtc", "date"),
    "reply_to_session_id": ("ReplyToSessionId", "str"),
    "message_location": ("MessageLocation", "str"),
    "lock_location": ("LockLocation", "str"),
    "enqueued_time_utc": ("EnqueuedTimeUtc", "date"),
}


class BrokerProperties:
    """Delivery metadata of a brokered message.

    All properties are optional. Properties set by the service (e.g. lock token, sequence
    number, delivery count) are only meaningful on a received message.

    :ivar str correlation_id: Correlation id
    :ivar str session_id: Session id
    :ivar int delivery_count: Number of times the message has been delivered
    :ivar locked_until_utc: Time the lock on the message expires
    :type locked_until_utc: :class:`datetime.datetime`
    :ivar str lock_token: Lock token of a peek-locked message
    :ivar str message_id: Message id
    :ivar str label: Application specific label
    :ivar str reply_to: Address to reply to
    :ivar int sequence_number: Unique number assigned by the service
    :ivar float time_to_live: Time to live of the message, in seconds
    :ivar str to: Address the message is sent to
    :ivar scheduled_enqueue_time_utc: Time the message is to be enqueued
    :type scheduled_enqueue_time_utc: :class:`datetime.datetime`
    :ivar str reply_to_session_id: Session id to reply to
    :ivar str message_location: URL of the message
    :ivar str lock_location: URL of the lock of a peek-locked message
    :ivar enqueued_time_utc: Time the message was enqueued
    :type enqueued_time_utc: :class:`datetime.datetime`
    """

    def __init__(self, **kwargs: Any) -> None:
        """
        :raises: TypeError if an unknown property is provided
        """
        for attr in _property_map:
            setattr(self, attr, kwargs.pop(attr, None))
        if kwargs:
            raise TypeError("Unsupported broker properties: {}".format(", ".join(kwargs)))

    def __eq__(self, other):
        if not isinstance(other, BrokerProperties):
            return NotImplemented
        return self.__dict__ == other.__dict__

    def __repr__(self):
        populated = ", ".join(
            "{}={!r}".format(attr, getattr(self, attr))
            for attr in _property_map
            if getattr(self, attr) is not None
        )
        return "BrokerProperties({})".format(populated)

    def to_dict(self) -> Dict[str, Any]:
        """Return the populated properties as a dictionary keyed by their wire names"""
        d = {}
        for attr, (key, value_type) in _property_map.items():
            value = getattr(self, attr)
            if value is None:
                continue
            if value_type == "date":
                value = _format_date(value)
            d[key] = value
        return d

    def to_string(self) -> str:
        """Encode the properties as a single line value, safe to use as an HTTP header.

        Non-ASCII and control characters are escaped by the JSON encoding.
        """
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=True)

    @classmethod
    def from_string(cls, value: Optional[str]) -> Self:
        """Decode properties from the value of a ``BrokerProperties`` header.

        This never fails. Broker properties are best-effort metadata, so an undecodable value
        results in empty properties rather than an error. Unknown keys are ignored.
        """
        if not value:
            return cls()
        try:
            d = json.loads(value)
            if not isinstance(d, dict):
                raise ValueError("Broker properties must be a JSON object")
            return cls.from_dict(d)
        except (ValueError, TypeError) as e:
            logger.warning(
                "Unable to decode broker properties, using empty properties: {}".format(e)
            )
            return cls()

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> Self:
        """Build properties from a dictionary keyed by wire names.

        :raises: ValueError or TypeError if a value has the wrong type
        """
        properties = cls()
        for attr, (key, value_type) in _property_map.items():
            if key not in d or d[key] is None:
                continue
            setattr(properties, attr, _convert(d[key], value_type))
        return properties


def _convert(value, value_type):
    if value_type == "str":
        return str(value)
    elif value_type == "int":
        if isinstance(value, bool):
            raise TypeError("Expected an integer, got a boolean")
        return int(value)
    elif value_type == "float":
        if isinstance(value, bool):
            raise TypeError("Expected a number, got a boolean")
        return float(value)
    else:
        return _parse_date(value)


def _parse_date(value: str) -> datetime.datetime:
    if not isinstance(value, str):
        raise TypeError("Expected an RFC 1123 date string, got {!r}".format(value))
    # parsedate_to_datetime raises TypeError or ValueError, depending on Python version
    return email.utils.parsedate_to_datetime(value)


def _format_date(value: datetime.datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=datetime.timezone.utc)
    return email.utils.format_datetime(value.astimezone(datetime.timezone.utc), usegmt=True)
