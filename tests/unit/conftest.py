# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
import pytest
from azure.servicebusrest.http_transport import HTTPResponse, HTTPTransport


@pytest.fixture
def arbitrary_exception():
    class ArbitraryException(Exception):
        pass

    e = ArbitraryException("arbitrary description")
    return e


@pytest.fixture
def arbitrary_base_exception():
    class ArbitraryBaseException(BaseException):
        pass

    e = ArbitraryBaseException("arbitrary description")
    return e


@pytest.fixture
def mock_transport(mocker):
    """Transport that makes no requests. Defaults to an empty 200 OK response for every request.
    Customize the return value of .execute() in the test if you need a specific response."""
    transport = mocker.MagicMock(spec=HTTPTransport)
    transport.execute.return_value = HTTPResponse(status_code=200, reason="OK")
    return transport
