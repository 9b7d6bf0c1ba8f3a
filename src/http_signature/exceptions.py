"""
Exception classes for the HTTP signature library
"""

from typing import Optional, Dict, Any


class ErrorCodes:
    """Standard error codes for signing and verification operations"""

    # Argument errors
    INVALID_ARGUMENT = "INVALID_ARGUMENT"

    # Key material errors
    KEY_NOT_FOUND = "KEY_NOT_FOUND"
    KEY_UNREADABLE = "KEY_UNREADABLE"
    KEY_DECRYPTION_FAILED = "KEY_DECRYPTION_FAILED"
    INVALID_KEY = "INVALID_KEY"

    # Algorithm errors
    ALGORITHM_UNAVAILABLE = "ALGORITHM_UNAVAILABLE"

    # Crypto errors
    SIGNATURE_COMPUTATION_FAILED = "SIGNATURE_COMPUTATION_FAILED"
    VERIFICATION_FAILED = "VERIFICATION_FAILED"

    # Protocol errors
    MALFORMED_HEADER = "MALFORMED_HEADER"

    # Configuration errors
    INVALID_CONFIG = "INVALID_CONFIG"


class HttpSignatureError(Exception):
    """Base exception for all HTTP signature errors"""

    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}


class ValidationError(HttpSignatureError):
    """Exception raised when a required argument is missing or unsafe"""

    def __init__(self, message: str, error_code: str = ErrorCodes.INVALID_ARGUMENT,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class KeyNotFoundError(HttpSignatureError):
    """Exception raised when no key source was given or the key file does not exist"""

    def __init__(self, message: str, error_code: str = ErrorCodes.KEY_NOT_FOUND,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class KeyUnreadableError(HttpSignatureError):
    """Exception raised when a key file exists but cannot be read"""

    def __init__(self, message: str, error_code: str = ErrorCodes.KEY_UNREADABLE,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class KeyDecryptionError(HttpSignatureError):
    """Exception raised for a wrong or missing passphrase on an encrypted key"""

    def __init__(self, message: str, error_code: str = ErrorCodes.KEY_DECRYPTION_FAILED,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class InvalidKeyError(HttpSignatureError):
    """Exception raised for structurally invalid key material or a key of the wrong type"""

    def __init__(self, message: str, error_code: str = ErrorCodes.INVALID_KEY,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class AlgorithmUnavailableError(HttpSignatureError):
    """Exception raised when no signature backend can be initialized"""

    def __init__(self, message: str, error_code: str = ErrorCodes.ALGORITHM_UNAVAILABLE,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class SignatureComputationError(HttpSignatureError):
    """Exception raised when computing a signature fails internally"""

    def __init__(self, message: str, error_code: str = ErrorCodes.SIGNATURE_COMPUTATION_FAILED,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class VerificationError(HttpSignatureError):
    """
    Exception raised when verification cannot be carried out.

    A signature that merely does not match is reported as ``False`` by the
    verify operations, never with this exception.
    """

    def __init__(self, message: str, error_code: str = ErrorCodes.VERIFICATION_FAILED,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class MalformedHeaderError(HttpSignatureError):
    """Exception raised for an Authorization header that cannot be parsed"""

    def __init__(self, message: str, error_code: str = ErrorCodes.MALFORMED_HEADER,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class ConfigurationError(HttpSignatureError):
    """Exception raised for invalid or incomplete signer configuration"""

    def __init__(self, message: str, error_code: str = ErrorCodes.INVALID_CONFIG,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)
