# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains tools for working with Shared Access Signature (SAS) Tokens"""

import logging
import threading
import time
import urllib.parse
from typing import Dict, List, Optional, Union
from .exceptions import SasTokenError
from .signing_mechanism import SigningMechanism

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_UPDATE_MARGIN: int = 120
REQUIRED_SASTOKEN_FIELDS: List[str] = ["sr", "sig", "se"]
VALID_SASTOKEN_FIELDS: List[str] = REQUIRED_SASTOKEN_FIELDS + ["skn"]


class RenewableSasToken:
    """Renewable Shared Access Signature Token used to authenticate a request.

    This token is 'renewable', which means that it can be updated when necessary to
    prevent expiry, by using the .refresh() method.

    Data Attributes:
    expiry_time (int): Time that token will expire (in UTC, since epoch)
    ttl (int): Time to live for the token, in seconds
    """

    _auth_rule_token_format = (
        "SharedAccessSignature sr={resource}&sig={signature}&se={expiry}&skn={keyname}"
    )
    _simple_token_format = "SharedAccessSignature sr={resource}&sig={signature}&se={expiry}"

    def __init__(
        self,
        uri: str,
        signing_mechanism: SigningMechanism,
        key_name: Optional[str] = None,
        ttl: int = 3600,
    ) -> None:
        """
        :param str uri: URI of the resource to be accessed
        :param signing_mechanism: The signing mechanism to use in the SasToken
        :type signing_mechanism: Child classes of :class:`SigningMechanism`
        :param str key_name: Shared Access Key Name (optional)
        :param int ttl: Time to live for the token, in seconds (default 3600)

        :raises: SasTokenError if an error occurs building a SasToken
        """
        self._uri = uri
        self._signing_mechanism = signing_mechanism
        self._key_name = key_name
        self._expiry_time = 0  # This will be overwritten by the .refresh() call below
        self._token = ""  # This will be overwritten by the .refresh() call below

        self.ttl = ttl
        self.refresh()

    def __str__(self) -> str:
        return self._token

    def refresh(self) -> None:
        """
        Refresh the SasToken lifespan, giving it a new expiry time, and generating a new token.
        """
        self._expiry_time = int(time.time() + self.ttl)
        self._token = self._build_token()

    def _build_token(self) -> str:
        """Build SasToken representation

        :returns: String representation of the token
        """
        url_encoded_uri = urllib.parse.quote(self._uri, safe="")
        message = url_encoded_uri + "\n" + str(self.expiry_time)
        try:
            signature = self._signing_mechanism.sign(message)
        except Exception as e:
            # Because of variant signing mechanisms, we don't know what error might be raised.
            # So we catch all of them.
            raise SasTokenError("Unable to build SasToken from given values") from e
        url_encoded_signature = urllib.parse.quote(signature, safe="")
        if self._key_name:
            token = self._auth_rule_token_format.format(
                resource=url_encoded_uri,
                signature=url_encoded_signature,
                expiry=str(self.expiry_time),
                keyname=self._key_name,
            )
        else:
            token = self._simple_token_format.format(
                resource=url_encoded_uri,
                signature=url_encoded_signature,
                expiry=str(self.expiry_time),
            )
        return token

    @property
    def expiry_time(self) -> int:
        """Expiry Time is READ ONLY"""
        return self._expiry_time


class NonRenewableSasToken:
    """NonRenewable Shared Access Signature Token used to authenticate a request.

    This token is 'non-renewable', which means that it is invalid once it expires, and there
    is no way to keep it alive. Instead, a new token must be created.

    Data Attributes:
    expiry_time (int): Time that token will expire (in UTC, since epoch)
    resource_uri (str): URI for the resource the Token provides authentication to access
    """

    def __init__(self, sastoken_string: str) -> None:
        """
        :param str sastoken_string: A string representation of a SAS token

        :raises: SasTokenError if the string is not a valid SAS token
        """
        self._token = sastoken_string
        self._token_info = get_sastoken_info_from_string(self._token)

    def __str__(self) -> str:
        return self._token

    @property
    def expiry_time(self) -> int:
        """Expiry Time is READ ONLY"""
        return int(self._token_info["se"])

    @property
    def resource_uri(self) -> str:
        """Resource URI is READ ONLY"""
        uri = self._token_info["sr"]
        return urllib.parse.unquote(uri)


class SasTokenProvider:
    def __init__(
        self,
        sastoken: Union[RenewableSasToken, NonRenewableSasToken],
        token_update_margin: int = DEFAULT_TOKEN_UPDATE_MARGIN,
    ) -> None:
        """Object responsible for providing a valid SAS Token string for each request.

        A renewable token is refreshed whenever it is within the update margin of expiring.
        A non-renewable token is provided as-is until it expires.

        :param sastoken: The SasToken to provide
        :param int token_update_margin: Seconds before expiry at which a renewable token is
            refreshed (default 120)
        """
        self._sastoken = sastoken
        self._token_update_margin = token_update_margin
        self._lock = threading.Lock()

    def get_current_sastoken(self) -> str:
        """Return the current SAS Token string, refreshing it first if necessary

        :raises: SasTokenError if the token has expired and cannot be renewed
        """
        with self._lock:
            if time.time() >= self._sastoken.expiry_time - self._token_update_margin:
                if isinstance(self._sastoken, RenewableSasToken):
                    logger.debug("Updating SAS Token...")
                    self._sastoken.refresh()
                    logger.debug("SAS Token update succeeded")
                elif time.time() >= self._sastoken.expiry_time:
                    raise SasTokenError("SAS Token has expired and cannot be renewed")
            return str(self._sastoken)


def get_sastoken_info_from_string(sastoken_string: str) -> Dict[str, str]:
    """Given a SAS Token string, return a dictionary of it's keys and values"""
    pieces = sastoken_string.split("SharedAccessSignature ")
    if len(pieces) != 2:
        raise SasTokenError("Invalid SasToken string: Not a SasToken ")

    # Get sastoken info as dictionary
    try:
        sastoken_info = dict(map(str.strip, sub.split("=", 1)) for sub in pieces[1].split("&"))  # type: ignore
    except Exception as e:
        raise SasTokenError("Invalid SasToken string: Incorrectly formatted") from e

    # Validate that all required fields are present
    if not all(key in sastoken_info for key in REQUIRED_SASTOKEN_FIELDS):
        raise SasTokenError("Invalid SasToken string: Not all required fields present")

    # Warn if extraneous fields are present
    if not all(key in VALID_SASTOKEN_FIELDS for key in sastoken_info):
        logger.warning("Unexpected fields present in SAS Token")

    return sastoken_info
