# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module defines an abstract SigningMechanism, as well as common child implementations of it
"""

import abc
import base64
import hashlib
import hmac
from typing import Union


class SigningMechanism(abc.ABC):
    @abc.abstractmethod
    def sign(self, data_str: Union[str, bytes]) -> str:
        pass


class SymmetricKeySigningMechanism(SigningMechanism):
    def __init__(self, key: Union[str, bytes]) -> None:
        """
        A mechanism that signs data using a Service Bus shared access key

        NOTE: Service Bus uses the shared access key exactly as given (as UTF-8 bytes) to
        sign data. It is NOT base64 decoded first.

        :param key: Shared Access Key
        :type key: str or bytes

        :raises: ValueError if the key is empty or not a str/bytes
        """
        if isinstance(key, str):
            key = key.encode("utf-8")
        if not isinstance(key, bytes):
            raise ValueError("Invalid Shared Access Key")
        if not key:
            raise ValueError("Invalid Shared Access Key - cannot be empty")
        self._signing_key = key

    def sign(self, data_str: Union[str, bytes]) -> str:
        """
        Sign a data string with the shared access key and the HMAC-SHA256 algorithm.

        :param data_str: Data string to be signed
        :type data_str: str or bytes

        :returns: The signed data
        :rtype: str
        """
        if isinstance(data_str, str):
            data_str = data_str.encode("utf-8")

        # Derive signature via HMAC-SHA256 algorithm
        try:
            hmac_digest = hmac.HMAC(
                key=self._signing_key, msg=data_str, digestmod=hashlib.sha256
            ).digest()
            signed_data = base64.b64encode(hmac_digest)
        except TypeError as e:
            raise ValueError("Unable to sign string using the provided shared access key") from e
        # Convert from bytes to string
        return signed_data.decode("utf-8")
