# --------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains functions that build the URL paths for Service Bus REST operations.

Resource names are used verbatim as path segments, so they are only validated, never encoded.
"""

import logging
import urllib.parse
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

LIST_QUEUES_PATH = "$Resources/Queues"
LIST_TOPICS_PATH = "$Resources/Topics"


def _validate_name(name, param_name):
    if not isinstance(name, str):
        raise ConfigurationError("'{}' must be a string".format(param_name))
    if not name:
        raise ConfigurationError("'{}' must not be empty".format(param_name))
    return name


def get_queue_path(queue_name):
    """
    :return: The path of a queue. It is of the format
    $queue_name
    """
    return _validate_name(queue_name, "queue_name")


def get_topic_path(topic_name):
    """
    :return: The path of a topic. It is of the format
    $topic_name
    """
    return _validate_name(topic_name, "topic_name")


def get_subscription_path(topic_name, subscription_name):
    """
    :return: The path of a subscription. It is of the format
    $topic_name/subscriptions/$subscription_name
    """
    return "{topic}/subscriptions/{subscription}".format(
        topic=_validate_name(topic_name, "topic_name"),
        subscription=_validate_name(subscription_name, "subscription_name"),
    )


def get_rule_path(topic_name, subscription_name, rule_name):
    """
    :return: The path of a rule. It is of the format
    $topic_name/subscriptions/$subscription_name/rules/$rule_name
    """
    return "{subscription_path}/rules/{rule}".format(
        subscription_path=get_subscription_path(topic_name, subscription_name),
        rule=_validate_name(rule_name, "rule_name"),
    )


def get_list_queues_path():
    return LIST_QUEUES_PATH


def get_list_topics_path():
    return LIST_TOPICS_PATH


def get_list_subscriptions_path(topic_name):
    """
    :return: The path for listing the subscriptions of a topic. It is of the format
    $topic_name/subscriptions/
    """
    return "{}/subscriptions/".format(_validate_name(topic_name, "topic_name"))


def get_list_rules_path(topic_name, subscription_name):
    """
    :return: The path for listing the rules of a subscription. It is of the format
    $topic_name/subscriptions/$subscription_name/rules/
    """
    return "{}/rules/".format(get_subscription_path(topic_name, subscription_name))


def get_send_message_path(entity_name):
    """
    :return: The path for sending a message to a queue or topic. It is of the format
    $entity_name/messages
    """
    return "{}/messages".format(_validate_name(entity_name, "entity_name"))


def get_receive_queue_message_path(queue_name):
    """
    :return: The path for receiving a message from a queue. It is of the format
    $queue_name/messages/head
    """
    return "{}/messages/head".format(_validate_name(queue_name, "queue_name"))


def get_receive_subscription_message_path(topic_name, subscription_name):
    """
    :return: The path for receiving a message from a subscription. It is of the format
    $topic_name/subscriptions/$subscription_name/messages/head
    """
    return "{}/messages/head".format(get_subscription_path(topic_name, subscription_name))


def get_lock_location_path(lock_location):
    """
    Derive the path used to unlock or delete a locked message from its lock location URL.

    Scheme, host and any query component of the URL are discarded, and a single leading
    path separator is stripped, e.g. "https://host/q/messages/5/10?lt" becomes
    "q/messages/5/10".

    :raises: ConfigurationError if there is no lock location to act on
    """
    if not lock_location:
        raise ConfigurationError(
            "Message has no lock location - it was not received in peek-lock mode"
        )
    path = urllib.parse.urlsplit(lock_location).path
    if path.startswith("/"):
        path = path[1:]
    logger.debug("Derived lock location path '{}'".format(path))
    return path
