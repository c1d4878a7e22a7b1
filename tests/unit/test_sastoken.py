# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------

import pytest
import time
import re
import logging
import urllib.parse
from azure.servicebusrest.sastoken import (
    RenewableSasToken,
    NonRenewableSasToken,
    SasTokenProvider,
    DEFAULT_TOKEN_UPDATE_MARGIN,
)
from azure.servicebusrest.exceptions import SasTokenError

logging.basicConfig(level=logging.DEBUG)

fake_uri = "https://fake.servicebus.windows.net/myqueue"
fake_signed_data = "ajsc8nLKacIjGsYyB4iYDFCZaRMmmDrUuY5lncYDYPI="
fake_key_name = "RootManageSharedAccessKey"
fake_expiry = 12321312

simple_token_format = "SharedAccessSignature sr={resource}&sig={signature}&se={expiry}"
auth_rule_token_format = (
    "SharedAccessSignature sr={resource}&sig={signature}&se={expiry}&skn={keyname}"
)


def token_parser(token_str):
    """helper function that parses a token string for individual values"""
    token_map = {}
    kv_string = token_str.split(" ")[1]
    kv_pairs = kv_string.split("&")
    for kv in kv_pairs:
        t = kv.split("=")
        token_map[t[0]] = t[1]
    return token_map


class RenewableSasTokenTestConfig(object):
    @pytest.fixture
    def signing_mechanism(self, mocker):
        mechanism = mocker.MagicMock()
        mechanism.sign.return_value = fake_signed_data
        return mechanism

    @pytest.fixture(params=["No Key Name", "Key Name"])
    def sastoken(self, request, signing_mechanism):
        if request.param == "No Key Name":
            return RenewableSasToken(uri=fake_uri, signing_mechanism=signing_mechanism)
        else:
            return RenewableSasToken(
                uri=fake_uri, signing_mechanism=signing_mechanism, key_name=fake_key_name
            )


@pytest.mark.describe("RenewableSasToken")
class TestRenewableSasToken(RenewableSasTokenTestConfig):
    @pytest.mark.it("Instantiates with a default TTL of 3600 seconds if no TTL is provided")
    def test_default_ttl(self, signing_mechanism):
        s = RenewableSasToken(fake_uri, signing_mechanism)
        assert s.ttl == 3600

    @pytest.mark.it("Instantiates with a custom TTL if provided")
    def test_custom_ttl(self, signing_mechanism):
        s = RenewableSasToken(fake_uri, signing_mechanism, ttl=4747)
        assert s.ttl == 4747

    @pytest.mark.it("Instantiates with the given key name if provided")
    def test_custom_key_name(self, signing_mechanism):
        s = RenewableSasToken(fake_uri, signing_mechanism, key_name=fake_key_name)
        assert s._key_name == fake_key_name

    @pytest.mark.it(
        "Instantiates with an expiry time TTL seconds in the future from the moment of instantiation"
    )
    def test_expiry_time(self, mocker, signing_mechanism):
        fake_current_time = 1000
        mocker.patch.object(time, "time", return_value=fake_current_time)

        s = RenewableSasToken(fake_uri, signing_mechanism)
        assert s.expiry_time == fake_current_time + s.ttl

    @pytest.mark.it("Calls .refresh() to build the SAS token string on instantiation")
    def test_refresh_on_instantiation(self, mocker, signing_mechanism):
        refresh_mock = mocker.spy(RenewableSasToken, "refresh")
        assert refresh_mock.call_count == 0
        RenewableSasToken(fake_uri, signing_mechanism)
        assert refresh_mock.call_count == 1

    @pytest.mark.it("Returns the SAS token string as the string representation of the object")
    def test_str_rep(self, sastoken):
        assert str(sastoken) == sastoken._token

    @pytest.mark.it("Maintains the .expiry_time attribute as a read-only property")
    def test_expiry_time_read_only(self, sastoken):
        with pytest.raises(AttributeError):
            sastoken.expiry_time = 12321312


@pytest.mark.describe("RenewableSasToken - .refresh()")
class TestRenewableSasTokenRefresh(RenewableSasTokenTestConfig):
    @pytest.mark.it("Sets a new expiry time of TTL seconds in the future")
    def test_new_expiry(self, mocker, sastoken):
        fake_current_time = 1000
        mocker.patch.object(time, "time", return_value=fake_current_time)
        sastoken.refresh()
        assert sastoken.expiry_time == fake_current_time + sastoken.ttl

    @pytest.mark.it(
        "Signs a concatenation of the (URL encoded) URI and updated expiry time to create a signature"
    )
    def test_generate_new_token(self, mocker, signing_mechanism, sastoken):
        old_token_str = str(sastoken)
        mocker.patch.object(time, "time", return_value=1000)
        signing_mechanism.reset_mock()
        signing_mechanism.sign.return_value = "new_fake_signature"

        sastoken.refresh()

        assert str(sastoken) != old_token_str
        assert signing_mechanism.sign.call_count == 1
        assert signing_mechanism.sign.call_args == mocker.call(
            urllib.parse.quote(sastoken._uri, safe="") + "\n" + str(sastoken.expiry_time)
        )
        token_info = token_parser(str(sastoken))
        assert token_info["sig"] == "new_fake_signature"

    @pytest.mark.it(
        "Builds a token string from the URL encoded URI, expiry time, signature and key name"
    )
    def test_token_string(self, sastoken):
        token_str = sastoken._token

        if not sastoken._key_name:
            pattern = re.compile(r"SharedAccessSignature sr=(.+)&sig=(.+)&se=(.+)")
        else:
            pattern = re.compile(r"SharedAccessSignature sr=(.+)&sig=(.+)&se=(.+)&skn=(.+)")
        assert pattern.match(token_str)

        token_info = token_parser(token_str)
        assert token_info["sr"] == urllib.parse.quote(sastoken._uri, safe="")
        assert token_info["sig"] == urllib.parse.quote(
            sastoken._signing_mechanism.sign.return_value, safe=""
        )
        assert token_info["se"] == str(sastoken.expiry_time)
        if sastoken._key_name:
            assert token_info["skn"] == sastoken._key_name

    @pytest.mark.it("Raises a SasTokenError if an exception is raised by the signing mechanism")
    def test_signing_mechanism_raises(self, signing_mechanism, sastoken, arbitrary_exception):
        signing_mechanism.sign.side_effect = arbitrary_exception

        with pytest.raises(SasTokenError) as e_info:
            sastoken.refresh()
        assert e_info.value.__cause__ is arbitrary_exception


@pytest.mark.describe("NonRenewableSasToken")
class TestNonRenewableSasToken(object):
    @pytest.fixture(params=["No Key Name", "Key Name"])
    def sastoken_str(self, request):
        if request.param == "No Key Name":
            return simple_token_format.format(
                resource=urllib.parse.quote(fake_uri, safe=""),
                signature=urllib.parse.quote(fake_signed_data, safe=""),
                expiry=fake_expiry,
            )
        else:
            return auth_rule_token_format.format(
                resource=urllib.parse.quote(fake_uri, safe=""),
                signature=urllib.parse.quote(fake_signed_data, safe=""),
                expiry=fake_expiry,
                keyname=fake_key_name,
            )

    @pytest.mark.it("Instantiates from a valid SAS Token string")
    def test_instantiates_from_token_string(self, sastoken_str):
        s = NonRenewableSasToken(sastoken_str)
        assert s._token == sastoken_str

    @pytest.mark.it("Raises a SasTokenError if instantiating from an invalid SAS Token string")
    @pytest.mark.parametrize(
        "invalid_token_str",
        [
            pytest.param("sr=a%2Fb&sig=c2lnbmF0dXJl&se=12321312", id="Incomplete token format"),
            pytest.param(
                "SharedERRORSignature sr=a%2Fb&sig=c2lnbmF0dXJl&se=12321312",
                id="Invalid token format",
            ),
            pytest.param(
                "SharedAccessSignature sr=a%2Fbsig=c2lnbmF0dXJl&se12321312",
                id="Token values incorrectly formatted",
            ),
            pytest.param(
                "SharedAccessSignature sig=c2lnbmF0dXJl&se=12321312", id="Missing resource value"
            ),
            pytest.param("SharedAccessSignature sr=a%2Fb&se=12321312", id="Missing signature"),
            pytest.param("SharedAccessSignature sr=a%2Fb&sig=c2lnbmF0dXJl", id="Missing expiry"),
        ],
    )
    def test_raises_error_invalid_token_string(self, invalid_token_str):
        with pytest.raises(SasTokenError):
            NonRenewableSasToken(invalid_token_str)

    @pytest.mark.it("Tolerates extraneous values in the SAS Token string")
    def test_extraneous_values(self):
        s = NonRenewableSasToken("SharedAccessSignature sr=a%2Fb&sig=c2ln&se=12321312&foo=bar")
        assert s.expiry_time == 12321312

    @pytest.mark.it("Returns the SAS token string as the string representation of the object")
    def test_str_rep(self, sastoken_str):
        assert str(NonRenewableSasToken(sastoken_str)) == sastoken_str

    @pytest.mark.it("Has the expiry time of the SAS Token string, as an integer")
    def test_expiry_time(self, sastoken_str):
        assert NonRenewableSasToken(sastoken_str).expiry_time == fake_expiry

    @pytest.mark.it("Has the URL decoded resource URI of the SAS Token string")
    def test_resource_uri(self, sastoken_str):
        assert NonRenewableSasToken(sastoken_str).resource_uri == fake_uri

    @pytest.mark.it(
        "Maintains the .expiry_time and .resource_uri attributes as read-only properties"
    )
    def test_read_only(self, sastoken_str):
        sastoken = NonRenewableSasToken(sastoken_str)
        with pytest.raises(AttributeError):
            sastoken.expiry_time = 12312312312123
        with pytest.raises(AttributeError):
            sastoken.resource_uri = "new%2Ffake%2Furi"


@pytest.mark.describe("SasTokenProvider - .get_current_sastoken()")
class TestSasTokenProvider(object):
    @pytest.fixture
    def signing_mechanism(self, mocker):
        mechanism = mocker.MagicMock()
        mechanism.sign.return_value = fake_signed_data
        return mechanism

    @pytest.mark.it("Uses a default update margin of 120 seconds")
    def test_default_margin(self, signing_mechanism):
        provider = SasTokenProvider(RenewableSasToken(fake_uri, signing_mechanism))
        assert provider._token_update_margin == DEFAULT_TOKEN_UPDATE_MARGIN == 120

    @pytest.mark.it("Returns the current token string if it is not close to expiry")
    def test_current(self, mocker, signing_mechanism):
        sastoken = RenewableSasToken(fake_uri, signing_mechanism, ttl=3600)
        refresh_spy = mocker.spy(sastoken, "refresh")
        provider = SasTokenProvider(sastoken)
        assert provider.get_current_sastoken() == str(sastoken)
        assert refresh_spy.call_count == 0

    @pytest.mark.it(
        "Refreshes a renewable token within the update margin of expiry, then returns it"
    )
    def test_refresh(self, mocker, signing_mechanism):
        sastoken = RenewableSasToken(fake_uri, signing_mechanism, ttl=3600)
        old_expiry = sastoken.expiry_time
        mocker.patch.object(time, "time", return_value=old_expiry - 60)
        provider = SasTokenProvider(sastoken)

        token_str = provider.get_current_sastoken()

        assert sastoken.expiry_time == old_expiry - 60 + 3600
        assert token_str == str(sastoken)
        assert token_parser(token_str)["se"] == str(sastoken.expiry_time)

    @pytest.mark.it("Returns a non-renewable token that is within the margin but not yet expired")
    def test_non_renewable_near_expiry(self, mocker):
        token_str = simple_token_format.format(
            resource="a%2Fb", signature="c2ln", expiry=fake_expiry
        )
        mocker.patch.object(time, "time", return_value=fake_expiry - 60)
        provider = SasTokenProvider(NonRenewableSasToken(token_str))
        assert provider.get_current_sastoken() == token_str

    @pytest.mark.it("Raises a SasTokenError if a non-renewable token has expired")
    def test_non_renewable_expired(self, mocker):
        token_str = simple_token_format.format(
            resource="a%2Fb", signature="c2ln", expiry=fake_expiry
        )
        mocker.patch.object(time, "time", return_value=fake_expiry + 1)
        provider = SasTokenProvider(NonRenewableSasToken(token_str))
        with pytest.raises(SasTokenError):
            provider.get_current_sastoken()
