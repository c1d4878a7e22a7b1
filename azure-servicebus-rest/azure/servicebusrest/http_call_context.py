# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains the description of a single HTTP request to be made to Service Bus"""

from typing import Dict, Iterable, Optional, Set, Union
from typing_extensions import Self


class HttpCallContext:
    """Everything needed to make one HTTP request, and to judge its response.

    A context never touches the network. It is handed to a transport, which makes the request
    and returns the response. Contexts are built per call, and never reused.

    :ivar str method: The request method (e.g. "POST")
    :ivar str path: The path for the URL, relative to the service host, with no leading "/"
    :ivar dict headers: HTTP headers to send with the request
    :ivar dict query_params: Query parameters to append to the URL
    :ivar bytes body: The body of the request
    :ivar set status_codes: The response status codes that indicate success
    """

    def __init__(self) -> None:
        self.method: Optional[str] = None
        self.path: str = ""
        self.headers: Dict[str, str] = {}
        self.query_params: Dict[str, str] = {}
        self.body: bytes = b""
        self.status_codes: Set[int] = set()

    def set_method(self, method: str) -> Self:
        self.method = method
        return self

    def set_path(self, path: str) -> Self:
        self.path = path
        return self

    def add_header(self, name: str, value: str) -> Self:
        """Set a header. Setting a header with a name already present replaces the old value."""
        self.headers[name] = value
        return self

    def add_query_parameter(self, name: str, value: Union[str, int]) -> Self:
        """Set a query parameter. Setting a name already present replaces the old value."""
        self.query_params[name] = str(value)
        return self

    def set_body(self, body: Union[bytes, str]) -> Self:
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.body = body
        return self

    def add_status_code(self, status_code: int) -> Self:
        self.status_codes.add(status_code)
        return self

    def add_status_codes(self, status_codes: Iterable[int]) -> Self:
        self.status_codes.update(status_codes)
        return self

    def accepts(self, status_code: int) -> bool:
        """Return True if the given response status code indicates success for this request"""
        return status_code in self.status_codes

    def __repr__(self) -> str:
        return (
            "HttpCallContext(method={!r}, path={!r}, query_params={!r}, status_codes={!r})".format(
                self.method, self.path, self.query_params, sorted(self.status_codes)
            )
        )
