"""
Cryptographic operations for the HTTP signature library
"""

from .keys import (
    RSAKeyPair,
    load_key_pair,
    load_key_pair_from_file,
    load_key_pair_from_stream,
    load_public_key,
    key_fingerprint,
    is_encrypted_pem,
)

from .algorithms import (
    SIGNATURE_ALGORITHM_LABEL,
    SUPPORTED_NATIVE_OS,
    SUPPORTED_NATIVE_ARCH,
    PlatformInfo,
    SignatureAlgorithm,
    SignatureContext,
    SoftwareRSASHA256,
    NativeRSASHA256,
    choose_algorithm,
    detect_platform,
    check_platform_compatibility,
)

__all__ = [
    # Key material
    'RSAKeyPair',
    'load_key_pair',
    'load_key_pair_from_file',
    'load_key_pair_from_stream',
    'load_public_key',
    'key_fingerprint',
    'is_encrypted_pem',

    # Signature algorithms
    'SIGNATURE_ALGORITHM_LABEL',
    'SUPPORTED_NATIVE_OS',
    'SUPPORTED_NATIVE_ARCH',
    'PlatformInfo',
    'SignatureAlgorithm',
    'SignatureContext',
    'SoftwareRSASHA256',
    'NativeRSASHA256',
    'choose_algorithm',
    'detect_platform',
    'check_platform_compatibility',
]
