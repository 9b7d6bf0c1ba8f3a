"""
HTTP authorization signer with RSA/SHA-256

This module provides the Signer, which computes rsa-sha256 signatures over a
date string or an arbitrary payload, renders them into Authorization header
values, and verifies both forms with the matching public key.
"""

import logging
from datetime import datetime
from typing import Optional, Union

from ..crypto.algorithms import (
    PlatformInfo,
    SignatureAlgorithm,
    choose_algorithm,
    detect_platform,
)
from ..crypto.keys import RSAKeyPair
from ..exceptions import (
    HttpSignatureError,
    InvalidKeyError,
    SignatureComputationError,
    ValidationError,
    VerificationError,
)
from .canonical_message import build_canonical_message, build_raw_message
from .header import extract_signature, render_authorization_header
from .utils import format_date, now, require_present, validate_identifier

logger = logging.getLogger(__name__)

DateInput = Union[str, datetime, None]


def _require_key_pair(key_pair: RSAKeyPair) -> RSAKeyPair:
    require_present(key_pair, "Key pair")
    if not isinstance(key_pair, RSAKeyPair):
        raise InvalidKeyError(
            f"Key pair must be an RSAKeyPair, got {type(key_pair).__name__}",
            details={"key_type": type(key_pair).__name__}
        )
    return key_pair


def _require_signature(signature: bytes) -> bytes:
    require_present(signature, "Signature")
    if not isinstance(signature, (bytes, bytearray, memoryview)):
        raise ValidationError(
            f"Signature must be bytes, got {type(signature).__name__}",
            details={"argument": "Signature"}
        )
    return bytes(signature)


class Signer:
    """
    HTTP authorization signer.

    The signature backend is chosen once, at construction. Every sign or
    verify call runs in its own backend context, so one Signer can be shared
    between threads without locking.
    """

    def __init__(self, use_native: bool = True, platform_info: Optional[PlatformInfo] = None):
        """
        Initialize the signer.

        Args:
            use_native: True to enable native acceleration of signing when
                the platform supports it
            platform_info: Platform signals; detected from the host when None
        """
        self.use_native = use_native
        self.platform_info = platform_info if platform_info is not None else detect_platform()
        self._algorithm = choose_algorithm(use_native, self.platform_info)
        logger.debug(f"Signer created with {self._algorithm.name} backend")

    @property
    def algorithm(self) -> SignatureAlgorithm:
        """The signature backend in use."""
        return self._algorithm

    @property
    def native_enabled(self) -> bool:
        """True when the native backend was selected."""
        return self._algorithm.native

    def sign(self, login: str, fingerprint: str, key_pair: RSAKeyPair, data: bytes) -> bytes:
        """
        Cryptographically sign arbitrary data.

        Args:
            login: Account/login name
            fingerprint: RSA key fingerprint
            key_pair: RSA key pair whose private key signs
            data: Data to sign, possibly empty

        Returns:
            bytes: Raw signature

        Raises:
            ValidationError: If an argument is missing, or the login or
                fingerprint is empty or holds quote or control characters
                (the same rule as for Authorization headers)
            InvalidKeyError: If the key pair cannot sign with rsa-sha256
            SignatureComputationError: If the computation fails
        """
        validate_identifier(login, "Login")
        validate_identifier(fingerprint, "Fingerprint")
        _require_key_pair(key_pair)
        message = build_raw_message(data)

        return self._sign(key_pair, message)

    def create_authorization_header(self, login: str, fingerprint: str,
                                    key_pair: RSAKeyPair, date: DateInput = None) -> str:
        """
        Generate the Authorization header value for a request.

        Args:
            login: Account/login name
            fingerprint: RSA key fingerprint
            key_pair: RSA key pair whose private key signs
            date: Date string sent in the Date header, a datetime to format,
                or None for the current time

        Returns:
            str: Value for the Authorization header
        """
        validate_identifier(login, "Login")
        validate_identifier(fingerprint, "Fingerprint")
        _require_key_pair(key_pair)

        if date is None:
            date_string = self.default_sign_date_as_string()
        elif isinstance(date, datetime):
            date_string = format_date(date)
        elif isinstance(date, str):
            date_string = date
        else:
            raise ValidationError(
                f"Date must be a string or datetime, got {type(date).__name__}",
                details={"argument": "Date"}
            )

        signature = self._sign(key_pair, build_canonical_message(date_string))
        return render_authorization_header(login, fingerprint, signature)

    def verify(self, login: str, fingerprint: str, key_pair: RSAKeyPair,
               data: bytes, signature: bytes) -> bool:
        """
        Verify a signature over arbitrary data.

        Args:
            login: Account/login name
            fingerprint: RSA key fingerprint
            key_pair: RSA key pair whose public key verifies
            data: Data that was signed
            signature: Raw signature to check

        Returns:
            bool: True if the signature is valid, False if not

        Raises:
            ValidationError: If an argument is missing, or the login or
                fingerprint is empty or holds quote or control characters
                (the same rule as for Authorization headers)
            InvalidKeyError: If the public key is unusable
            VerificationError: If the check itself cannot be performed
        """
        validate_identifier(login, "Login")
        validate_identifier(fingerprint, "Fingerprint")
        _require_key_pair(key_pair)
        message = build_raw_message(data)
        signature_bytes = _require_signature(signature)

        return self._verify(key_pair, message, signature_bytes)

    def verify_authorization_header(self, key_pair: RSAKeyPair, authz_header: str,
                                    date: Union[str, datetime]) -> bool:
        """
        Verify a signed HTTP Authorization header.

        The signing string is rebuilt from ``date`` as supplied by the
        transport (normally the request's Date header), never from the
        Authorization header itself.

        Args:
            key_pair: RSA key pair whose public key verifies
            authz_header: Authorization header value
            date: Date string the header was created with

        Returns:
            bool: True if the request is valid, False if not

        Raises:
            MalformedHeaderError: If the header has no decodable signature
        """
        _require_key_pair(key_pair)
        require_present(authz_header, "Authorization header")
        require_present(date, "Date")

        if isinstance(date, datetime):
            date_string = format_date(date)
        elif isinstance(date, str):
            date_string = date
        else:
            raise ValidationError(
                f"Date must be a string or datetime, got {type(date).__name__}",
                details={"argument": "Date"}
            )

        signature = extract_signature(authz_header)

        return self._verify(key_pair, build_canonical_message(date_string), signature)

    def default_sign_date_as_string(self) -> str:
        """The current timestamp in UTC as a date string."""
        return now()

    def _sign(self, key_pair: RSAKeyPair, message: bytes) -> bytes:
        try:
            return self._algorithm.sign(key_pair.private_key, message)
        except HttpSignatureError:
            raise
        except Exception as e:
            logger.error(f"Signature computation failed with {self._algorithm.name}: {type(e).__name__}")
            raise SignatureComputationError(
                f"Signature computation failed: {e}",
                details={"algorithm": self._algorithm.name}
            ) from e

    def _verify(self, key_pair: RSAKeyPair, message: bytes, signature: bytes) -> bool:
        try:
            return self._algorithm.verify(key_pair.public_key, message, signature)
        except HttpSignatureError:
            raise
        except Exception as e:
            logger.error(f"Signature verification failed with {self._algorithm.name}: {type(e).__name__}")
            raise VerificationError(
                f"Signature verification failed: {e}",
                details={"algorithm": self._algorithm.name}
            ) from e

    def __repr__(self) -> str:
        return (
            f"Signer(algorithm='{self._algorithm.name}', native={self.native_enabled}, "
            f"platform='{self.platform_info.os_name}/{self.platform_info.arch}')"
        )
