# --------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------

import logging
import ssl
import urllib.parse
from typing import Dict, Mapping, Optional
import requests  # type: ignore
from requests.structures import CaseInsensitiveDict  # type: ignore
from . import constant
from . import exceptions as exc
from . import product_info
from .config import ServiceBusClientConfig
from .http_call_context import HttpCallContext

logger = logging.getLogger(__name__)

SUPPORTED_METHODS = [
    constant.HTTP_GET,
    constant.HTTP_POST,
    constant.HTTP_PUT,
    constant.HTTP_PATCH,
    constant.HTTP_DELETE,
]


class HTTPResponse:
    """The status, headers and body of a completed HTTP exchange.

    Header lookup is case-insensitive.
    """

    def __init__(
        self,
        status_code: int,
        reason: str = "",
        headers: Optional[Mapping[str, str]] = None,
        body: bytes = b"",
    ) -> None:
        self.status_code = status_code
        self.reason = reason
        self.headers = CaseInsensitiveDict(headers or {})
        self.body = body

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def __repr__(self) -> str:
        return "HTTPResponse(status_code={}, reason={!r})".format(self.status_code, self.reason)


class HTTPTransport:
    """
    A wrapper class that provides an implementation-agnostic HTTP interface.

    Each call to .execute() is a single, blocking request/response exchange. The transport
    holds no state that changes between requests, so it can be shared across threads.
    """

    def __init__(self, config: ServiceBusClientConfig) -> None:
        """
        Constructor to instantiate an HTTP protocol wrapper.

        :param config: The configuration of the Service Bus client
        :type config: :class:`azure.servicebusrest.config.ServiceBusClientConfig`
        """
        self._hostname = config.hostname
        self._ssl_context = config.ssl_context or _create_default_ssl_context(
            config.server_verification_cert
        )
        self._sastoken_provider = config.sastoken_provider
        self._timeout = config.timeout
        self._proxies = format_proxies(config.proxy_options)
        self._user_agent = product_info.get_user_agent(config.product_info)
        self._http_adapter = self._create_http_adapter()

    def _create_http_adapter(self):
        """
        This method creates a custom HTTPAdapter for use with a requests library session.
        It will allow for use of a custom configured SSL context.
        """
        ssl_context = self._ssl_context

        class CustomSSLContextHTTPAdapter(requests.adapters.HTTPAdapter):
            def init_poolmanager(self, *args, **kwargs):
                kwargs["ssl_context"] = ssl_context
                return super().init_poolmanager(*args, **kwargs)

            def proxy_manager_for(self, *args, **kwargs):
                kwargs["ssl_context"] = ssl_context
                return super().proxy_manager_for(*args, **kwargs)

        return CustomSSLContextHTTPAdapter()

    def _format_url(self, context: HttpCallContext) -> str:
        query_string = urllib.parse.urlencode(context.query_params, safe="$")
        return "https://{hostname}/{path}{query_string}".format(
            hostname=self._hostname,
            path=context.path,
            query_string="?" + query_string if query_string else "",
        )

    def _format_headers(self, context: HttpCallContext) -> Dict[str, str]:
        headers = {constant.USER_AGENT_HEADER: self._user_agent}
        if self._sastoken_provider:
            headers[constant.AUTHORIZATION_HEADER] = self._sastoken_provider.get_current_sastoken()
        headers.update(context.headers)
        return headers

    def execute(self, context: HttpCallContext) -> HTTPResponse:
        """
        Send the request described by the context to the remote host, then wait for and read
        the response.

        :param context: The request to make
        :type context: :class:`azure.servicebusrest.http_call_context.HttpCallContext`

        :returns: The response, whatever its status code
        :rtype: :class:`HTTPResponse`

        :raises: ValueError if the request method is not supported
        :raises: requests.exceptions.Timeout if the request times out
        :raises: ConnectionFailedError if the request could not be completed
        :raises: SasTokenError if a SAS Token could not be provided
        """
        if context.method not in SUPPORTED_METHODS:
            raise ValueError("Invalid method type: {}".format(context.method))

        url = self._format_url(context)
        headers = self._format_headers(context)

        logger.info("sending https {} request to {} .".format(context.method, context.path))

        # Mount the transport adapter to a requests session
        session = requests.Session()
        session.mount("https://", self._http_adapter)

        try:
            # Note that various configuration options are not set here due to them being set
            # via the HTTPAdapter that was mounted at session level.
            response = session.request(
                context.method,
                url,
                data=context.body,
                headers=headers,
                proxies=self._proxies,
                timeout=self._timeout,
            )
        except requests.exceptions.Timeout:
            # NOTE: This breaks the convention in transports where we don't expose anything
            # but builtin exceptions and the exceptions defined by this package. However,
            # there is no local deadline to translate a timeout into, so just expose it.
            raise
        except Exception as e:
            raise exc.ConnectionFailedError("Unexpected HTTPS failure during request") from e
        finally:
            session.close()

        logger.debug(
            "received https response {} {} for {} request to {}".format(
                response.status_code, response.reason, context.method, context.path
            )
        )
        return HTTPResponse(
            status_code=response.status_code,
            reason=response.reason,
            headers=response.headers,
            body=response.content,
        )


def _create_default_ssl_context(server_verification_cert: Optional[str] = None) -> ssl.SSLContext:
    """
    This method creates the SSLContext object used to authenticate the connection when the user
    does not supply one.
    """
    logger.debug("creating a SSL context")
    ssl_context = ssl.SSLContext(protocol=ssl.PROTOCOL_TLS_CLIENT)
    ssl_context.minimum_version = ssl.TLSVersion.TLSv1_2
    if server_verification_cert:
        logger.debug("configuring SSL context with custom server verification cert")
        ssl_context.load_verify_locations(cadata=server_verification_cert)
    else:
        logger.debug("configuring SSL context with default certs")
        ssl_context.load_default_certs()
    ssl_context.verify_mode = ssl.CERT_REQUIRED
    ssl_context.check_hostname = True
    return ssl_context


def format_proxies(proxy_options):
    """
    Format the data from the proxy_options object into a format for use with the requests library
    """
    proxies = {}
    if proxy_options:
        # Basic address/port formatting
        proxy = "{address}:{port}".format(
            address=proxy_options.proxy_address, port=proxy_options.proxy_port
        )
        # Add credentials if necessary
        if proxy_options.proxy_username and proxy_options.proxy_password:
            auth = "{username}:{password}".format(
                username=proxy_options.proxy_username, password=proxy_options.proxy_password
            )
            proxy = auth + "@" + proxy
        # Set proxy for use on HTTP or HTTPS connections
        if proxy_options.proxy_type == "HTTP":
            proxies["http"] = "http://" + proxy
            proxies["https"] = "http://" + proxy
        elif proxy_options.proxy_type == "SOCKS4":
            proxies["http"] = "socks4://" + proxy
            proxies["https"] = "socks4://" + proxy
        elif proxy_options.proxy_type == "SOCKS5":
            proxies["http"] = "socks5://" + proxy
            proxies["https"] = "socks5://" + proxy
        else:
            # This should be unreachable due to validation on the ProxyOptions object
            raise ValueError("Invalid proxy type: {}".format(proxy_options.proxy_type))

    return proxies
