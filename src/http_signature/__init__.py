"""
HTTP signature library
RSA/SHA-256 signing and verification of HTTP Authorization headers
"""

from .version import __version__
from .crypto import (
    RSAKeyPair,
    load_key_pair,
    load_key_pair_from_file,
    load_key_pair_from_stream,
    load_public_key,
    key_fingerprint,
    PlatformInfo,
    SignatureAlgorithm,
    SoftwareRSASHA256,
    NativeRSASHA256,
    choose_algorithm,
    detect_platform,
    check_platform_compatibility,
)
from .exceptions import (
    ErrorCodes,
    HttpSignatureError,
    ValidationError,
    KeyNotFoundError,
    KeyUnreadableError,
    KeyDecryptionError,
    InvalidKeyError,
    AlgorithmUnavailableError,
    SignatureComputationError,
    VerificationError,
    MalformedHeaderError,
    ConfigurationError,
)
from .signing import (
    Signer,
    AuthorizationHeader,
    build_signing_string,
    build_canonical_message,
    render_authorization_header,
    extract_signature,
    parse_authorization_header,
    format_date,
    now,
    parse_date,
    HttpSignatureAuth,
    create_signing_session,
    verify_request_headers,
)
from .config import (
    SignerConfig,
    load_config_from_env,
    load_config_from_json,
    load_config_from_file,
)

__all__ = [
    '__version__',

    # Key material
    'RSAKeyPair',
    'load_key_pair',
    'load_key_pair_from_file',
    'load_key_pair_from_stream',
    'load_public_key',
    'key_fingerprint',

    # Algorithm selection
    'PlatformInfo',
    'SignatureAlgorithm',
    'SoftwareRSASHA256',
    'NativeRSASHA256',
    'choose_algorithm',
    'detect_platform',
    'check_platform_compatibility',

    # Signing and verification
    'Signer',
    'AuthorizationHeader',
    'build_signing_string',
    'build_canonical_message',
    'render_authorization_header',
    'extract_signature',
    'parse_authorization_header',
    'format_date',
    'now',
    'parse_date',

    # HTTP integration
    'HttpSignatureAuth',
    'create_signing_session',
    'verify_request_headers',

    # Configuration
    'SignerConfig',
    'load_config_from_env',
    'load_config_from_json',
    'load_config_from_file',

    # Exceptions
    'ErrorCodes',
    'HttpSignatureError',
    'ValidationError',
    'KeyNotFoundError',
    'KeyUnreadableError',
    'KeyDecryptionError',
    'InvalidKeyError',
    'AlgorithmUnavailableError',
    'SignatureComputationError',
    'VerificationError',
    'MalformedHeaderError',
    'ConfigurationError',
]
