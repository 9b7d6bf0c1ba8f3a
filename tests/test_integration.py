"""
Integration tests for signing requests made with the requests library
"""

from unittest.mock import patch

import pytest
import requests

from http_signature.exceptions import MalformedHeaderError, ValidationError
from http_signature.signing import (
    HttpSignatureAuth,
    Signer,
    create_signing_session,
    parse_authorization_header,
    verify_request_headers,
)

from conftest import TEST_DATE, TEST_FINGERPRINT, TEST_LOGIN

API_URL = "https://api.example.com/jdoe/stor"


class TestHttpSignatureAuth:
    """Test the requests authentication handler"""

    def test_adds_date_and_authorization(self, signer, key_pair):
        """Test that unsigned requests get both headers"""
        auth = HttpSignatureAuth(TEST_LOGIN, TEST_FINGERPRINT, key_pair, signer=signer)

        with patch('http_signature.signing.signer.now', return_value=TEST_DATE):
            prepared = requests.Request('GET', API_URL, auth=auth).prepare()

        assert prepared.headers['Date'] == TEST_DATE
        parsed = parse_authorization_header(prepared.headers['Authorization'])
        assert parsed.key_id == "/jdoe/keys/aa:bb:cc"
        assert signer.verify_authorization_header(key_pair, prepared.headers['Authorization'], TEST_DATE)

    def test_existing_date_is_signed(self, signer, key_pair):
        """Test that a caller-provided Date header is signed verbatim"""
        auth = HttpSignatureAuth(TEST_LOGIN, TEST_FINGERPRINT, key_pair, signer=signer)
        date = "Sun Dec 31 23:59:59 2023 GMT"

        prepared = requests.Request('POST', API_URL, headers={'Date': date}, data=b"body", auth=auth).prepare()

        assert prepared.headers['Date'] == date
        assert signer.verify_authorization_header(key_pair, prepared.headers['Authorization'], date)

    def test_creates_signer_when_missing(self, key_pair):
        auth = HttpSignatureAuth(TEST_LOGIN, TEST_FINGERPRINT, key_pair, use_native=False)

        assert isinstance(auth.signer, Signer)
        assert auth.signer.native_enabled is False
        assert repr(auth) == "HttpSignatureAuth(login='jdoe', fingerprint='aa:bb:cc')"

    def test_rejects_invalid_arguments(self, signer, key_pair):
        with pytest.raises(ValidationError):
            HttpSignatureAuth("", TEST_FINGERPRINT, key_pair, signer=signer)

        with pytest.raises(ValidationError):
            HttpSignatureAuth(TEST_LOGIN, TEST_FINGERPRINT, None, signer=signer)


class TestSigningSession:
    """Test sessions configured for request signing"""

    def test_session_signs_requests(self, signer, key_pair):
        session = create_signing_session(TEST_LOGIN, TEST_FINGERPRINT, key_pair, signer=signer)

        assert isinstance(session.auth, HttpSignatureAuth)

        prepared = session.prepare_request(requests.Request('GET', API_URL))
        assert verify_request_headers(signer, key_pair, prepared.headers)

    def test_existing_session_is_configured(self, signer, key_pair):
        session = requests.Session()
        session.headers['User-Agent'] = "test-agent"

        result = create_signing_session(TEST_LOGIN, TEST_FINGERPRINT, key_pair, signer=signer, session=session)

        assert result is session
        prepared = session.prepare_request(requests.Request('GET', API_URL))
        assert prepared.headers['User-Agent'] == "test-agent"
        assert 'Authorization' in prepared.headers

    def test_session_send_carries_headers(self, signer, key_pair):
        """Test that the signed headers reach the transport adapter"""
        session = create_signing_session(TEST_LOGIN, TEST_FINGERPRINT, key_pair, signer=signer)

        response = requests.Response()
        response.status_code = 204

        with patch.object(requests.adapters.HTTPAdapter, 'send', return_value=response) as send:
            result = session.get(API_URL)

        assert result.status_code == 204
        sent = send.call_args[0][0]
        assert verify_request_headers(signer, key_pair, sent.headers)


class TestVerifyRequestHeaders:
    """Test server-side verification of received headers"""

    def test_case_insensitive_lookup(self, signer, key_pair):
        authorization = signer.create_authorization_header(TEST_LOGIN, TEST_FINGERPRINT, key_pair, TEST_DATE)
        headers = {'authorization': authorization, 'DATE': TEST_DATE}

        assert verify_request_headers(signer, key_pair, headers) is True

    def test_wrong_date(self, signer, key_pair):
        authorization = signer.create_authorization_header(TEST_LOGIN, TEST_FINGERPRINT, key_pair, TEST_DATE)
        headers = {'Authorization': authorization, 'Date': "Fri Jan 2 00:00:00 1970 GMT"}

        assert verify_request_headers(signer, key_pair, headers) is False

    def test_missing_headers(self, signer, key_pair):
        with pytest.raises(MalformedHeaderError):
            verify_request_headers(signer, key_pair, {'Date': TEST_DATE})

        with pytest.raises(MalformedHeaderError):
            verify_request_headers(signer, key_pair, {'Authorization': 'Signature signature="AQID"'})

        with pytest.raises(ValidationError):
            verify_request_headers(signer, key_pair, None)
