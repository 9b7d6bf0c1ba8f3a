"""
HTTP client integration for request signing

This module plugs the Signer into the requests library: outgoing requests
get a Date header (when missing) and an Authorization header signed over
that exact date. The receiving side can check a request's headers with
``verify_request_headers``.
"""

import logging
from typing import Mapping, Optional

import requests
from requests.auth import AuthBase
from requests.models import PreparedRequest
from requests.structures import CaseInsensitiveDict

from ..crypto.keys import RSAKeyPair
from ..exceptions import MalformedHeaderError, ValidationError
from .signer import Signer
from .utils import require_present, validate_identifier

logger = logging.getLogger(__name__)

AUTHORIZATION_HEADER = 'Authorization'
DATE_HEADER = 'Date'


class HttpSignatureAuth(AuthBase):
    """
    requests authentication handler that signs every request.

    Usage::

        auth = HttpSignatureAuth('jdoe', 'aa:bb:cc', key_pair)
        requests.get('https://api.example.com/jdoe/stor', auth=auth)
    """

    def __init__(
        self,
        login: str,
        fingerprint: str,
        key_pair: RSAKeyPair,
        signer: Optional[Signer] = None,
        use_native: bool = True
    ):
        """
        Initialize the authentication handler.

        Args:
            login: Account/login name
            fingerprint: RSA key fingerprint
            key_pair: RSA key pair used to sign requests
            signer: Existing signer to reuse (created when None)
            use_native: Enable native acceleration for a newly created signer
        """
        self.login = validate_identifier(login, "Login")
        self.fingerprint = validate_identifier(fingerprint, "Fingerprint")
        self.key_pair = require_present(key_pair, "Key pair")
        self.signer = signer if signer is not None else Signer(use_native=use_native)

    def __call__(self, request: PreparedRequest) -> PreparedRequest:
        date = request.headers.get(DATE_HEADER)
        if not date:
            date = self.signer.default_sign_date_as_string()
            request.headers[DATE_HEADER] = date

        request.headers[AUTHORIZATION_HEADER] = self.signer.create_authorization_header(
            self.login, self.fingerprint, self.key_pair, date
        )

        logger.debug(f"Signed {request.method} request to {request.url}")
        return request

    def __repr__(self) -> str:
        return f"HttpSignatureAuth(login='{self.login}', fingerprint='{self.fingerprint}')"


def create_signing_session(
    login: str,
    fingerprint: str,
    key_pair: RSAKeyPair,
    signer: Optional[Signer] = None,
    use_native: bool = True,
    session: Optional[requests.Session] = None
) -> requests.Session:
    """
    Create a requests session that signs every request.

    Args:
        login: Account/login name
        fingerprint: RSA key fingerprint
        key_pair: RSA key pair used to sign requests
        signer: Existing signer to reuse (created when None)
        use_native: Enable native acceleration for a newly created signer
        session: Existing session to configure (created when None)

    Returns:
        requests.Session: Session with signing authentication attached
    """
    session = session if session is not None else requests.Session()
    session.auth = HttpSignatureAuth(login, fingerprint, key_pair, signer=signer, use_native=use_native)
    logger.info(f"Configured request signing for login: {login}")
    return session


def verify_request_headers(
    signer: Signer,
    key_pair: RSAKeyPair,
    headers: Mapping[str, str]
) -> bool:
    """
    Verify the Authorization header of a received request.

    Header names are matched case-insensitively.

    Args:
        signer: Signer used for verification
        key_pair: RSA key pair whose public key verifies
        headers: Request headers

    Returns:
        bool: True if the request is valid, False if not

    Raises:
        MalformedHeaderError: If the Authorization or Date header is missing
            or the Authorization header cannot be parsed
    """
    require_present(signer, "Signer")
    if headers is None:
        raise ValidationError("Headers must be present")

    lookup = CaseInsensitiveDict(headers)

    authorization = lookup.get(AUTHORIZATION_HEADER)
    if not authorization:
        raise MalformedHeaderError("Request has no Authorization header")

    date = lookup.get(DATE_HEADER)
    if not date:
        raise MalformedHeaderError("Request has no Date header")

    return signer.verify_authorization_header(key_pair, authorization, date)
