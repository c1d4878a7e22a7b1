# --------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
import logging
from . import exceptions as exc

logger = logging.getLogger(__name__)

_status_code_to_error = {
    400: exc.ArgumentError,
    401: exc.UnauthorizedError,
    403: exc.QuotaExceededError,
    404: exc.NotFoundError,
    409: exc.ConflictError,
    410: exc.MessageLockLostError,
    412: exc.PreconditionFailedError,
    413: exc.MessageSizeExceededError,
    429: exc.ThrottlingError,
    500: exc.InternalServerError,
    503: exc.ServiceUnavailableError,
}


def translate_error(response):
    """
    Build the ServiceError matching the status code of an unexpected response.

    Unknown status codes produce a generic ServiceError. Every error returned carries the
    status code, reason, body and headers of the response.

    :param response: The unexpected response
    :type response: :class:`azure.servicebusrest.http_transport.HTTPResponse`
    :rtype: :class:`azure.servicebusrest.exceptions.ServiceError`
    """
    error_cls = _status_code_to_error.get(response.status_code, exc.ServiceError)
    logger.debug(
        "Translating unexpected status {} into {}".format(response.status_code, error_cls.__name__)
    )
    return error_cls(
        status_code=response.status_code,
        reason=response.reason,
        body=response.body,
        headers=response.headers,
    )
