"""
HTTP signature library - Request Signing Module

Signs a date string or an arbitrary payload with rsa-sha256 and renders the
result as an Authorization header value; verifies both forms.
"""

from .signer import Signer

from .canonical_message import (
    SIGNING_STRING_TEMPLATE,
    build_signing_string,
    build_canonical_message,
    build_raw_message,
)

from .header import (
    AUTHORIZATION_HEADER_TEMPLATE,
    SIGNATURE_MARKER,
    AuthorizationHeader,
    render_authorization_header,
    extract_signature,
    parse_authorization_header,
)

from .utils import (
    format_date,
    now,
    parse_date,
)

from .integration import (
    HttpSignatureAuth,
    create_signing_session,
    verify_request_headers,
)

# Public API exports
__all__ = [
    # Core signing functionality
    'Signer',
    # Canonical message
    'SIGNING_STRING_TEMPLATE',
    'build_signing_string',
    'build_canonical_message',
    'build_raw_message',
    # Authorization header
    'AUTHORIZATION_HEADER_TEMPLATE',
    'SIGNATURE_MARKER',
    'AuthorizationHeader',
    'render_authorization_header',
    'extract_signature',
    'parse_authorization_header',
    # Timestamps
    'format_date',
    'now',
    'parse_date',
    # HTTP Integration
    'HttpSignatureAuth',
    'create_signing_session',
    'verify_request_headers',
]
