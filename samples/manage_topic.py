# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This sample demonstrates managing a topic, a filtered subscription, and its rules"""

import os
from azure.servicebusrest import (
    ServiceBusRestProxy,
    TopicInfo,
    SubscriptionInfo,
    RuleInfo,
    RuleDescription,
    SqlFilter,
    SqlRuleAction,
    ListOptions,
    BrokeredMessage,
    ReceiveMessageOptions,
)

CONNECTION_STRING = os.getenv("SERVICEBUS_CONNECTION_STRING")
TOPIC_NAME = "sample-topic"
SUBSCRIPTION_NAME = "high-priority"


def main():
    proxy = ServiceBusRestProxy.from_connection_string(CONNECTION_STRING)

    proxy.create_topic(TopicInfo(TOPIC_NAME))
    proxy.create_subscription(TOPIC_NAME, SubscriptionInfo(SUBSCRIPTION_NAME))
    # Every new subscription has a $Default rule that matches all messages
    proxy.delete_rule(TOPIC_NAME, SUBSCRIPTION_NAME, "$Default")
    proxy.create_rule(
        TOPIC_NAME,
        SUBSCRIPTION_NAME,
        RuleInfo(
            "priority-filter",
            RuleDescription(
                filter=SqlFilter("priority > 5"),
                action=SqlRuleAction("SET handled = 'true'"),
            ),
        ),
    )

    for rule_info in proxy.list_rules(TOPIC_NAME, SUBSCRIPTION_NAME):
        filter_type = type(rule_info.description.filter).__name__
        print("Rule '{}' uses a {}".format(rule_info.title, filter_type))

    for priority in (1, 9):
        message = BrokeredMessage(
            "priority {}".format(priority), custom_properties={"priority": priority}
        )
        proxy.send_topic_message(TOPIC_NAME, message)

    options = ReceiveMessageOptions(timeout=5).set_receive_and_delete()
    message = proxy.receive_subscription_message(TOPIC_NAME, SUBSCRIPTION_NAME, options)
    print("Received: {}".format(message))

    print("Topics in the namespace:")
    for topic_info in proxy.list_topics(ListOptions(top=10)):
        print("    {}".format(topic_info.title))

    proxy.delete_topic(TOPIC_NAME)


if __name__ == "__main__":
    main()
