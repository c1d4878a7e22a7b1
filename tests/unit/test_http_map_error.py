# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
import pytest
import logging
from azure.servicebusrest import http_map_error
from azure.servicebusrest import exceptions as exc
from azure.servicebusrest.http_transport import HTTPResponse

logging.basicConfig(level=logging.DEBUG)


@pytest.mark.describe(".translate_error()")
class TestTranslateError(object):
    @pytest.mark.it("Returns the ServiceError subclass matching the status code")
    @pytest.mark.parametrize(
        "status_code, expected_error",
        [
            pytest.param(400, exc.ArgumentError, id="400"),
            pytest.param(401, exc.UnauthorizedError, id="401"),
            pytest.param(403, exc.QuotaExceededError, id="403"),
            pytest.param(404, exc.NotFoundError, id="404"),
            pytest.param(409, exc.ConflictError, id="409"),
            pytest.param(410, exc.MessageLockLostError, id="410"),
            pytest.param(412, exc.PreconditionFailedError, id="412"),
            pytest.param(413, exc.MessageSizeExceededError, id="413"),
            pytest.param(429, exc.ThrottlingError, id="429"),
            pytest.param(500, exc.InternalServerError, id="500"),
            pytest.param(503, exc.ServiceUnavailableError, id="503"),
        ],
    )
    def test_known_status(self, status_code, expected_error):
        error = http_map_error.translate_error(HTTPResponse(status_code))
        assert type(error) is expected_error
        assert isinstance(error, exc.ServiceError)

    @pytest.mark.it("Returns a generic ServiceError for any other status code")
    @pytest.mark.parametrize(
        "status_code",
        [
            pytest.param(200, id="200 (not accepted by the operation)"),
            pytest.param(302, id="302"),
            pytest.param(418, id="418"),
            pytest.param(502, id="502"),
        ],
    )
    def test_unknown_status(self, status_code):
        error = http_map_error.translate_error(HTTPResponse(status_code))
        assert type(error) is exc.ServiceError

    @pytest.mark.it("Carries the status code, reason, body and headers of the response")
    def test_details(self):
        response = HTTPResponse(
            404,
            reason="Not Found",
            headers={"x-ms-request-id": "abc"},
            body=b"<Error><Code>404</Code></Error>",
        )
        error = http_map_error.translate_error(response)
        assert error.status_code == 404
        assert error.reason == "Not Found"
        assert error.body == b"<Error><Code>404</Code></Error>"
        assert error.headers["x-ms-request-id"] == "abc"
        assert "404 Not Found" in str(error)


@pytest.mark.describe("ServiceBusError hierarchy")
class TestErrorHierarchy(object):
    @pytest.mark.it("Derives every error raised by the package from ServiceBusError")
    @pytest.mark.parametrize(
        "error_cls",
        [
            pytest.param(exc.ConfigurationError, id="ConfigurationError"),
            pytest.param(exc.SasTokenError, id="SasTokenError"),
            pytest.param(exc.ConnectionFailedError, id="ConnectionFailedError"),
            pytest.param(exc.MalformedResponse, id="MalformedResponse"),
            pytest.param(exc.SchemaViolation, id="SchemaViolation"),
            pytest.param(exc.ServiceError, id="ServiceError"),
        ],
    )
    def test_base(self, error_cls):
        assert issubclass(error_cls, exc.ServiceBusError)

    @pytest.mark.it("Allows a ConfigurationError to be caught as a ValueError")
    def test_configuration_error(self):
        assert issubclass(exc.ConfigurationError, ValueError)

    @pytest.mark.it("Names the offending field of a SchemaViolation")
    def test_schema_violation(self):
        error = exc.SchemaViolation("LockDuration")
        assert error.field == "LockDuration"
        assert "LockDuration" in str(error)
