# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module defines constants for use across the azure-servicebus-rest package
"""

VERSION = "1.0.0"
USER_AGENT_IDENTIFIER = "azure-servicebus-rest-py"

# XML namespaces
ATOM_NAMESPACE = "http://www.w3.org/2005/Atom"
SERVICE_BUS_NAMESPACE = "http://schemas.microsoft.com/netservices/2010/10/servicebus/connect"
XML_SCHEMA_INSTANCE_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"

# Media types
ATOM_ENTRY_CONTENT_TYPE = "application/atom+xml;type=entry;charset=utf-8"
XML_CONTENT_TYPE = "application/xml"

# Headers
CONTENT_TYPE_HEADER = "Content-Type"
BROKER_PROPERTIES_HEADER = "BrokerProperties"
LOCATION_HEADER = "Location"
DATE_HEADER = "Date"
AUTHORIZATION_HEADER = "Authorization"
USER_AGENT_HEADER = "User-Agent"

# Query parameters
QP_TOP = "$top"
QP_SKIP = "$skip"
QP_TIMEOUT = "timeout"

# HTTP methods
HTTP_GET = "GET"
HTTP_PUT = "PUT"
HTTP_POST = "POST"
HTTP_DELETE = "DELETE"
HTTP_PATCH = "PATCH"

# Status codes
STATUS_OK = 200
STATUS_CREATED = 201
STATUS_NO_CONTENT = 204

# Description element names
QUEUE_DESCRIPTION = "QueueDescription"
TOPIC_DESCRIPTION = "TopicDescription"
SUBSCRIPTION_DESCRIPTION = "SubscriptionDescription"
RULE_DESCRIPTION = "RuleDescription"

# Local socket timeout for a single HTTP request, in seconds
DEFAULT_HTTP_TIMEOUT = 10
