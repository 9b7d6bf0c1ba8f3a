"""
Authorization header rendering and parsing

Header values have the fixed form::

    Signature keyId="/<login>/keys/<fingerprint>",algorithm="rsa-sha256",signature="<base64>"
"""

import base64
import binascii
import re
from dataclasses import dataclass, field

from ..crypto.algorithms import SIGNATURE_ALGORITHM_LABEL
from ..exceptions import MalformedHeaderError
from .utils import require_present, validate_identifier

AUTHORIZATION_HEADER_TEMPLATE = (
    'Signature keyId="/{}/keys/{}",algorithm="' + SIGNATURE_ALGORITHM_LABEL + '",signature="{}"'
)

SIGNATURE_MARKER = 'signature="'

AUTHORIZATION_HEADER_PATTERN = re.compile(
    r'^Signature keyId="/(?P<login>[^"]+)/keys/(?P<fingerprint>[^"/]+)",'
    r'algorithm="(?P<algorithm>[^"]+)",signature="(?P<signature>[^"]*)"$'
)


@dataclass(frozen=True)
class AuthorizationHeader:
    """
    Structured Authorization header value

    Attributes:
        login: Account/login name
        fingerprint: Key fingerprint
        algorithm: Signature algorithm label
        signature: Raw signature bytes
    """
    login: str
    fingerprint: str
    algorithm: str
    signature: bytes = field(repr=False)

    @property
    def key_id(self) -> str:
        return f"/{self.login}/keys/{self.fingerprint}"

    def render(self) -> str:
        return render_authorization_header(self.login, self.fingerprint, self.signature)


def encode_signature(signature: bytes) -> str:
    """Standard base64 without line wrapping."""
    return base64.b64encode(signature).decode('ascii')


def decode_signature(encoded: str) -> bytes:
    """
    Decode a base64 signature from a header.

    Raises:
        MalformedHeaderError: If the value is empty or not valid base64
    """
    if not encoded:
        raise MalformedHeaderError("Authorization header has an empty signature")

    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedHeaderError(f"Authorization header signature is not valid base64: {e}") from e


def render_authorization_header(login: str, fingerprint: str, signature: bytes) -> str:
    """
    Render an Authorization header value.

    Args:
        login: Account/login name
        fingerprint: Key fingerprint
        signature: Raw signature bytes

    Returns:
        str: Header value ready for the Authorization field
    """
    validate_identifier(login, "Login")
    validate_identifier(fingerprint, "Fingerprint")
    require_present(signature, "Signature")
    return AUTHORIZATION_HEADER_TEMPLATE.format(login, fingerprint, encode_signature(signature))


def extract_signature(header_value: str) -> bytes:
    """
    Extract the raw signature from an Authorization header value.

    The signature is the text between ``signature="`` and the final closing
    quote of the header value.

    Raises:
        MalformedHeaderError: If the marker or closing quote is missing, or
            the signature is not valid base64
    """
    require_present(header_value, "Authorization header")

    start = header_value.find(SIGNATURE_MARKER)
    if start == -1:
        raise MalformedHeaderError("Invalid authorization header: no signature component")

    start += len(SIGNATURE_MARKER)
    end = header_value.rfind('"')
    if end < start:
        raise MalformedHeaderError("Invalid authorization header: unterminated signature component")

    return decode_signature(header_value[start:end])


def parse_authorization_header(header_value: str) -> AuthorizationHeader:
    """
    Parse a full Authorization header value.

    Args:
        header_value: Header value in the fixed template form

    Returns:
        AuthorizationHeader: Parsed login, fingerprint, algorithm and signature

    Raises:
        MalformedHeaderError: If the value does not follow the template
    """
    require_present(header_value, "Authorization header")

    match = AUTHORIZATION_HEADER_PATTERN.match(header_value.strip())
    if not match:
        raise MalformedHeaderError("Authorization header does not match the Signature format")

    return AuthorizationHeader(
        login=match.group('login'),
        fingerprint=match.group('fingerprint'),
        algorithm=match.group('algorithm'),
        signature=decode_signature(match.group('signature')),
    )
