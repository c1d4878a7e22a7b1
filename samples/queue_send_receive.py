# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This sample demonstrates sending messages to a queue, then receiving them in peek-lock mode"""

import datetime
import os
import uuid
from azure.servicebusrest import (
    ServiceBusRestProxy,
    BrokeredMessage,
    BrokerProperties,
    ReceiveMessageOptions,
    QueueInfo,
    QueueDescription,
    ConflictError,
    ServiceError,
    ConnectionFailedError,
)

CONNECTION_STRING = os.getenv("SERVICEBUS_CONNECTION_STRING")
QUEUE_NAME = os.getenv("SERVICEBUS_QUEUE_NAME", "sample-queue")
TOTAL_MESSAGES = 3


def main():
    proxy = ServiceBusRestProxy.from_connection_string(CONNECTION_STRING)

    print("Creating queue '{}'...".format(QUEUE_NAME))
    try:
        description = QueueDescription(lock_duration=datetime.timedelta(seconds=30))
        proxy.create_queue(QueueInfo(QUEUE_NAME, description))
        print("Queue created")
    except ConflictError:
        print("Queue already exists")

    for i in range(TOTAL_MESSAGES):
        message = BrokeredMessage(
            body="Message #{}".format(i + 1),
            content_type="text/plain",
            broker_properties=BrokerProperties(message_id=str(uuid.uuid4()), label="sample"),
            custom_properties={"sample-index": i + 1},
        )
        print("Sending Message #{}...".format(i + 1))
        proxy.send_queue_message(QUEUE_NAME, message)
        print("Send Complete")

    options = ReceiveMessageOptions(timeout=10).set_peek_lock()
    while True:
        message = proxy.receive_queue_message(QUEUE_NAME, options)
        if message is None:
            print("No more messages")
            break
        print("Received: {}".format(message))
        print("    Message ID: {}".format(message.message_id))
        print("    Delivery Count: {}".format(message.delivery_count))
        print("    Index: {}".format(message.get_property("sample-index")))
        # Acknowledge the message so it is not delivered again
        proxy.delete_message(message)


if __name__ == "__main__":
    try:
        main()
    except ServiceError as e:
        print("Service rejected the request ({}). Exiting".format(e.status_code))
    except ConnectionFailedError:
        print("Could not connect. Exiting")
