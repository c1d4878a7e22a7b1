# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------

import logging
import socks
import ssl
from typing import Optional, Union
from .constant import DEFAULT_HTTP_TIMEOUT
from .sastoken import SasTokenProvider


logger = logging.getLogger(__name__)


string_to_socks_constant_map = {"HTTP": socks.HTTP, "SOCKS4": socks.SOCKS4, "SOCKS5": socks.SOCKS5}
socks_constant_to_string_map = {socks.HTTP: "HTTP", socks.SOCKS4: "SOCKS4", socks.SOCKS5: "SOCKS5"}


class ProxyOptions:
    """
    A class containing various options to send traffic through proxy servers.
    """

    def __init__(
        self,
        proxy_type: Union[str, int],
        proxy_address: str,
        proxy_port: Optional[int] = None,
        proxy_username: Optional[str] = None,
        proxy_password: Optional[str] = None,
    ):
        """
        Initializer for proxy options.
        :param str proxy_type: The type of the proxy server. This can be one of three possible choices: "HTTP", "SOCKS4", or "SOCKS5"
        :param str proxy_address: IP address or DNS name of proxy server
        :param int proxy_port: The port of the proxy server. Defaults to 1080 for socks and 8080 for http.
        :param str proxy_username: (optional) username for the proxy server.
         If it is not provided, authentication will not be used (servers may accept unauthenticated requests).
        :param str proxy_password: (optional) password for the proxy server, used along with the username.
        """
        (self.proxy_type, self.proxy_type_socks) = _format_proxy_type(proxy_type)
        self.proxy_address = proxy_address
        if proxy_port is None:
            self.proxy_port = _derive_default_proxy_port(self.proxy_type)
        else:
            self.proxy_port = int(proxy_port)
        self.proxy_username = proxy_username
        self.proxy_password = proxy_password


class ServiceBusClientConfig:
    """
    Class for storing all configurations/options used to communicate with a Service Bus namespace.
    """

    def __init__(
        self,
        *,
        hostname: str,
        ssl_context: Optional[ssl.SSLContext] = None,
        server_verification_cert: Optional[str] = None,
        sastoken_provider: Optional[SasTokenProvider] = None,
        proxy_options: Optional[ProxyOptions] = None,
        timeout: Union[int, float] = DEFAULT_HTTP_TIMEOUT,
        product_info: str = "",
    ) -> None:
        """Initializer for ServiceBusClientConfig

        :param str hostname: The hostname of the Service Bus namespace
        :param ssl_context: SSLContext to use with the client. If not provided, a default one
            will be created by the transport
        :type ssl_context: :class:`ssl.SSLContext`
        :param str server_verification_cert: The trusted certificate chain, used to verify the
            service when no ssl_context is provided
        :param sastoken_provider: Object that can provide SasTokens
        :type sastoken_provider: :class:`SasTokenProvider`
        :param proxy_options: Details of proxy configuration
        :type proxy_options: :class:`ProxyOptions`
        :param timeout: Number of seconds to wait on the network for a single HTTP request.
            This is local to the transport, and unrelated to the receive timeout sent to the
            service.
        :param str product_info: A custom identification string appended to the User-Agent
        """
        if not hostname:
            raise ValueError("'hostname' must be provided")

        # Network
        self.hostname = hostname
        self.proxy_options = proxy_options
        self.timeout = _sanitize_timeout(timeout)

        # Auth
        self.sastoken_provider = sastoken_provider
        self.ssl_context = ssl_context
        self.server_verification_cert = server_verification_cert

        # Identification
        self.product_info = product_info


# Sanitization #


def _format_proxy_type(proxy_type):
    """Returns a tuple of formats for proxy type (string, socks library constant)"""
    try:
        return (proxy_type, string_to_socks_constant_map[proxy_type])
    except KeyError:
        # Backwards compatibility for when the socks library constants are used in the API
        try:
            return (socks_constant_to_string_map[proxy_type], proxy_type)
        except KeyError:
            raise ValueError("Invalid Proxy Type")


def _derive_default_proxy_port(proxy_type):
    if proxy_type == "HTTP":
        return 8080
    else:
        return 1080


def _sanitize_timeout(timeout):
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
        raise TypeError("Invalid type for 'timeout'. Must be a numeric value.")
    if timeout <= 0:
        raise ValueError("'timeout' must be greater than 0")
    return timeout
