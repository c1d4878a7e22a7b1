# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
import pytest
import logging
import ssl
import requests
from azure.servicebusrest import http_transport
from azure.servicebusrest.http_transport import HTTPTransport, HTTPResponse, format_proxies
from azure.servicebusrest.http_call_context import HttpCallContext
from azure.servicebusrest.config import ServiceBusClientConfig, ProxyOptions
from azure.servicebusrest.sastoken import SasTokenProvider
from azure.servicebusrest import exceptions as exc

logging.basicConfig(level=logging.DEBUG)

fake_hostname = "fake.servicebus.windows.net"
fake_path = "myqueue/messages"
fake_sastoken = "SharedAccessSignature sr=fake&sig=fakesig&se=12345"


# ~~~~~ Fixtures ~~~~~
@pytest.fixture
def client_config():
    return ServiceBusClientConfig(
        hostname=fake_hostname, ssl_context=ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    )


@pytest.fixture
def mock_sastoken_provider(mocker):
    provider = mocker.MagicMock(spec=SasTokenProvider)
    provider.get_current_sastoken.return_value = fake_sastoken
    return provider


@pytest.fixture
def mock_session(mocker):
    mock_session = mocker.patch.object(requests, "Session").return_value
    mock_response = mock_session.request.return_value
    mock_response.status_code = 201
    mock_response.reason = "Created"
    mock_response.headers = requests.structures.CaseInsensitiveDict({"Location": "fake"})
    mock_response.content = b"fake response"
    return mock_session


@pytest.fixture
def transport(client_config):
    return HTTPTransport(client_config)


@pytest.fixture
def context():
    return (
        HttpCallContext()
        .set_method("POST")
        .set_path(fake_path)
        .add_header("Content-Type", "text/plain")
        .set_body(b"fake body")
        .add_status_code(201)
    )


# ~~~~~ Tests ~~~~~
@pytest.mark.describe("HTTPTransport - Instantiation")
class TestInstantiation(object):
    @pytest.mark.it("Stores the hostname, SSL context and timeout from the config")
    def test_stores_config(self, client_config):
        client_config.timeout = 30
        transport = HTTPTransport(client_config)
        assert transport._hostname == fake_hostname
        assert transport._ssl_context is client_config.ssl_context
        assert transport._timeout == 30

    @pytest.mark.it("Creates a default SSL context if none is provided in the config")
    def test_default_ssl_context(self, mocker):
        spy = mocker.spy(http_transport, "_create_default_ssl_context")
        transport = HTTPTransport(ServiceBusClientConfig(hostname=fake_hostname))
        assert spy.call_count == 1
        ctx = transport._ssl_context
        assert ctx.verify_mode == ssl.CERT_REQUIRED
        assert ctx.check_hostname is True
        assert ctx.minimum_version == ssl.TLSVersion.TLSv1_2

    @pytest.mark.it("Loads the server verification cert from the config into a default SSL context")
    def test_server_verification_cert(self, mocker):
        mock_ssl_context_cls = mocker.patch.object(ssl, "SSLContext")
        config = ServiceBusClientConfig(
            hostname=fake_hostname, server_verification_cert="fake certificate"
        )
        transport = HTTPTransport(config)
        ssl_context = mock_ssl_context_cls.return_value
        assert transport._ssl_context is ssl_context
        assert ssl_context.load_verify_locations.call_count == 1
        assert ssl_context.load_verify_locations.call_args == mocker.call(cadata="fake certificate")
        assert ssl_context.load_default_certs.call_count == 0

    @pytest.mark.it("Creates an HTTPAdapter that uses the SSL context")
    def test_adapter(self, client_config):
        transport = HTTPTransport(client_config)
        assert isinstance(transport._http_adapter, requests.adapters.HTTPAdapter)

    @pytest.mark.it("Formats the proxy options from the config for the requests library")
    @pytest.mark.parametrize(
        "proxy_type, scheme",
        [
            pytest.param("HTTP", "http", id="HTTP"),
            pytest.param("SOCKS4", "socks4", id="SOCKS4"),
            pytest.param("SOCKS5", "socks5", id="SOCKS5"),
        ],
    )
    def test_proxies(self, client_config, proxy_type, scheme):
        client_config.proxy_options = ProxyOptions(
            proxy_type=proxy_type,
            proxy_address="127.0.0.1",
            proxy_port=1080,
            proxy_username="user",
            proxy_password="pass",
        )
        transport = HTTPTransport(client_config)
        expected = "{}://user:pass@127.0.0.1:1080".format(scheme)
        assert transport._proxies == {"http": expected, "https": expected}

    @pytest.mark.it("Uses no proxies if there are no proxy options in the config")
    def test_no_proxies(self, client_config):
        assert HTTPTransport(client_config)._proxies == {}
        assert format_proxies(None) == {}


@pytest.mark.describe("HTTPTransport - .execute()")
class TestExecute(object):
    @pytest.mark.it("Mounts the HTTPAdapter on a new requests session for HTTPS")
    def test_mount(self, transport, mock_session, context):
        transport.execute(context)
        assert mock_session.mount.call_count == 1
        assert mock_session.mount.call_args == (("https://", transport._http_adapter),)

    @pytest.mark.it("Makes a request with the method, URL, body and timeout of the context")
    def test_request(self, mocker, transport, mock_session, context):
        transport.execute(context)
        assert mock_session.request.call_count == 1
        assert mock_session.request.call_args == mocker.call(
            "POST",
            "https://{}/{}".format(fake_hostname, fake_path),
            data=b"fake body",
            headers=mocker.ANY,
            proxies={},
            timeout=transport._timeout,
        )

    @pytest.mark.it("Appends the query parameters of the context to the URL")
    def test_query(self, transport, mock_session, context):
        context.add_query_parameter("$top", 5).add_query_parameter("timeout", 60)
        transport.execute(context)
        url = mock_session.request.call_args[0][1]
        assert url == "https://{}/{}?$top=5&timeout=60".format(fake_hostname, fake_path)

    @pytest.mark.it("Sends the headers of the context, along with a User-Agent")
    def test_headers(self, transport, mock_session, context):
        transport.execute(context)
        headers = mock_session.request.call_args[1]["headers"]
        assert headers["Content-Type"] == "text/plain"
        assert headers["User-Agent"].startswith("azure-servicebus-rest-py/")
        assert "Authorization" not in headers

    @pytest.mark.it("Sends the current SAS Token as the Authorization header, if configured")
    def test_authorization(self, client_config, mock_sastoken_provider, mock_session, context):
        client_config.sastoken_provider = mock_sastoken_provider
        transport = HTTPTransport(client_config)
        transport.execute(context)
        headers = mock_session.request.call_args[1]["headers"]
        assert headers["Authorization"] == fake_sastoken
        assert mock_sastoken_provider.get_current_sastoken.call_count == 1

    @pytest.mark.it("Returns the status, reason, headers and body of the response")
    def test_response(self, transport, mock_session, context):
        response = transport.execute(context)
        assert isinstance(response, HTTPResponse)
        assert response.status_code == 201
        assert response.reason == "Created"
        assert response.headers["location"] == "fake"
        assert response.body == b"fake response"

    @pytest.mark.it("Returns error responses without raising")
    def test_error_response(self, transport, mock_session, context):
        mock_session.request.return_value.status_code = 404
        response = transport.execute(context)
        assert response.status_code == 404

    @pytest.mark.it("Closes the session after the request")
    def test_close(self, transport, mock_session, context):
        transport.execute(context)
        assert mock_session.close.call_count == 1

    @pytest.mark.it("Raises ValueError without making a request if the method is not supported")
    @pytest.mark.parametrize(
        "method", [pytest.param(None, id="No method"), pytest.param("FETCH", id="Unsupported")]
    )
    def test_bad_method(self, transport, mock_session, context, method):
        context.method = method
        with pytest.raises(ValueError):
            transport.execute(context)
        assert mock_session.request.call_count == 0

    @pytest.mark.it("Allows a requests Timeout to propagate")
    def test_timeout(self, transport, mock_session, context):
        mock_session.request.side_effect = requests.exceptions.Timeout()
        with pytest.raises(requests.exceptions.Timeout):
            transport.execute(context)
        assert mock_session.close.call_count == 1

    @pytest.mark.it("Raises a ConnectionFailedError if any other error occurs during the request")
    @pytest.mark.parametrize(
        "error",
        [
            pytest.param(requests.exceptions.ConnectionError(), id="ConnectionError"),
            pytest.param(requests.exceptions.SSLError(), id="SSLError"),
            pytest.param(ValueError(), id="Unexpected"),
        ],
    )
    def test_connection_failed(self, transport, mock_session, context, error):
        mock_session.request.side_effect = error
        with pytest.raises(exc.ConnectionFailedError) as e_info:
            transport.execute(context)
        assert e_info.value.__cause__ is error
        assert mock_session.close.call_count == 1


@pytest.mark.describe("HTTPResponse")
class TestHTTPResponse(object):
    @pytest.mark.it("Looks up headers regardless of the case of their names")
    def test_headers(self):
        response = HTTPResponse(200, headers={"BrokerProperties": "{}"})
        assert response.headers["brokerproperties"] == "{}"
        assert response.headers.get("BROKERPROPERTIES") == "{}"

    @pytest.mark.it("Decodes the body as UTF-8 text")
    def test_text(self):
        assert HTTPResponse(200, body="café".encode("utf-8")).text == "café"
