# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""Define Azure Service Bus domain user-facing exceptions to be shared across package"""
from typing import Mapping, Optional


class ServiceBusError(Exception):
    """Base class for all errors raised by this package"""

    pass


# Client-side Exceptions
class ConfigurationError(ServiceBusError, ValueError):
    """Represents invalid caller input detected before any request was made"""

    pass


class SasTokenError(ServiceBusError):
    """Represents a failure to build or use a SAS Token"""

    pass


# Transport Exceptions
class ConnectionFailedError(ServiceBusError):
    """Represents a failure to complete an HTTP exchange with the service"""

    pass


# Response Exceptions
class MalformedResponse(ServiceBusError):
    """Represents a response body that is not the expected Atom/XML shape"""

    pass


class SchemaViolation(ServiceBusError):
    """Represents parsed XML that lacks a required field or has an invalid value for one"""

    def __init__(self, field: str, message: Optional[str] = None) -> None:
        self.field = field
        if message is None:
            message = "Missing required field '{}'".format(field)
        super().__init__(message)


# Service Exceptions
class ServiceError(ServiceBusError):
    """Represents a response status outside of the set accepted by an operation"""

    def __init__(
        self,
        status_code: int,
        reason: str = "",
        body: bytes = b"",
        headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.status_code = status_code
        self.reason = reason
        self.body = body
        self.headers = headers if headers is not None else {}
        super().__init__("Service returned {} {}".format(status_code, reason).rstrip())


class ArgumentError(ServiceError):
    """Service returned 400"""

    pass


class UnauthorizedError(ServiceError):
    """Service returned 401"""

    pass


class QuotaExceededError(ServiceError):
    """Service returned 403"""

    pass


class NotFoundError(ServiceError):
    """Service returned 404"""

    pass


class ConflictError(ServiceError):
    """Service returned 409"""

    pass


class MessageLockLostError(ServiceError):
    """Service returned 410"""

    pass


class PreconditionFailedError(ServiceError):
    """Service returned 412"""

    pass


class MessageSizeExceededError(ServiceError):
    """Service returned 413"""

    pass


class ThrottlingError(ServiceError):
    """Service returned 429"""

    pass


class InternalServerError(ServiceError):
    """Service returned 500"""

    pass


class ServiceUnavailableError(ServiceError):
    """Service returned 503"""

    pass
