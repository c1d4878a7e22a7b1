# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module is for creating the User-Agent string sent with every Service Bus request."""

import platform
from .constant import VERSION, USER_AGENT_IDENTIFIER

python_runtime = platform.python_version()
os_type = platform.system()
os_release = platform.version()
architecture = platform.machine()


def _get_common_user_agent():
    return "({python_runtime};{os_type} {os_release};{architecture})".format(
        python_runtime=python_runtime,
        os_type=os_type,
        os_release=os_release,
        architecture=architecture,
    )


def get_user_agent(product_info=""):
    """
    Create the user agent for Service Bus, with any custom product information appended
    """
    return "{identifier}/{version}{common}{product_info}".format(
        identifier=USER_AGENT_IDENTIFIER,
        version=VERSION,
        common=_get_common_user_agent(),
        product_info=product_info,
    )
